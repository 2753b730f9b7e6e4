"""Build the test command + spawn options, then spawn it."""

import os
import subprocess
import sys
from dataclasses import dataclass, field

from jest_launch import log, process
from jest_launch.config import WorkspaceConfig
from jest_launch.process import SpawnOptions

INHERITED_CWD = "(inherited)"


@dataclass(frozen=True)
class SpawnInvocation:
    command: str
    options: SpawnOptions
    args: list[str] = field(default_factory=list)


def build_command_line(config: WorkspaceConfig, extra_args: list[str]) -> str:
    """Join the base command line, extra args and --config <path> with single spaces."""
    parts = [config.command_line or ""]
    parts.extend(extra_args)
    if config.path_to_config:
        parts.extend(["--config", config.path_to_config])
    return " ".join(parts)


def resolve_shell(shell: bool | str | None) -> bool | str:
    """None, False and "" all mean the default shell; a non-empty string names one."""
    if isinstance(shell, str) and shell:
        return shell
    return True


def is_windows(platform: str) -> bool:
    return platform.startswith("win")


def build_options(config: WorkspaceConfig, environ: dict[str, str], platform: str) -> SpawnOptions:
    """Resolve cwd, env, shell and detached from the config + ambient values.

    No CI variable is injected; node_env only overrides or adds keys.
    Detached everywhere but Windows so the whole process group can be signalled.
    """
    env = dict(environ)
    if config.node_env:
        env.update(config.node_env)

    return SpawnOptions(
        cwd=config.root_path or None,
        env=env,
        shell=resolve_shell(config.shell),
        detached=not is_windows(platform),
    )


def build_invocation(
    config: WorkspaceConfig,
    extra_args: list[str],
    environ: dict[str, str],
    platform: str,
) -> SpawnInvocation:
    return SpawnInvocation(
        command=build_command_line(config, extra_args),
        options=build_options(config, environ, platform),
    )


def launch(config: WorkspaceConfig, extra_args: list[str]) -> subprocess.Popen:
    """Spawn the test command once and return the process handle unmodified."""
    invocation = build_invocation(config, extra_args, dict(os.environ), sys.platform)

    if config.debug:
        opts = invocation.options
        log.debug(f"spawning: {invocation.command} (cwd={opts.cwd or INHERITED_CWD}, shell={opts.shell})")

    return process.spawn(invocation.command, [], invocation.options)
