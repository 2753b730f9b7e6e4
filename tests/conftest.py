"""Shared test fixtures."""

import pytest


@pytest.fixture
def mock_spawn(monkeypatch):
    """Mock process.spawn for tests."""
    from jest_launch import process

    calls = []
    handles = []
    events = []

    def fake_spawn(command, args, options):
        calls.append((command, args, options))
        events.append(("spawn", command))
        if handles:
            return handles.pop(0)
        return object()

    monkeypatch.setattr(process, "spawn", fake_spawn)

    return type("MockSpawn", (), {"calls": calls, "handles": handles, "events": events})()
