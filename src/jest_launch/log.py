"""Timestamped output."""

import sys
from datetime import datetime


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


def info(msg: str) -> None:
    print(f"[{_timestamp()}] {msg}", flush=True)


def step(msg: str) -> None:
    info(f"  {msg}")


def debug(msg: str) -> None:
    info(f"DEBUG: {msg}")


def error(msg: str) -> None:
    print(f"[{_timestamp()}] ERROR: {msg}", file=sys.stderr, flush=True)
