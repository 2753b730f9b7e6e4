"""Spawn wrapper — the single mock seam for all tests."""

import ntpath
import subprocess
import sys
from dataclasses import dataclass


@dataclass
class SpawnOptions:
    cwd: str | None
    env: dict[str, str]
    shell: bool | str
    detached: bool


def _is_cmd_shell(shell: str) -> bool:
    return ntpath.basename(shell).lower() in ("cmd", "cmd.exe")


def spawn(command: str, args: list[str], options: SpawnOptions) -> subprocess.Popen:
    """Start command under a shell and return the handle without waiting."""
    cmdline = " ".join([command, *args])

    if sys.platform.startswith("win"):
        if isinstance(options.shell, str):
            if _is_cmd_shell(options.shell):
                argv = [options.shell, "/d", "/s", "/c", cmdline]
            else:
                argv = [options.shell, "-c", cmdline]
            return subprocess.Popen(argv, cwd=options.cwd, env=options.env)
        return subprocess.Popen(cmdline, shell=True, cwd=options.cwd, env=options.env)

    executable = options.shell if isinstance(options.shell, str) else None
    return subprocess.Popen(
        cmdline,
        shell=True,
        executable=executable,
        cwd=options.cwd,
        env=options.env,
        start_new_session=options.detached,
    )
