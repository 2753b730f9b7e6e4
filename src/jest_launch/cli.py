"""Click entry point — all commands."""

import json
import os
import signal
import sys

import click

from jest_launch import __version__, log
from jest_launch import config as config_mod
from jest_launch import launcher


def _workspace_options(f):
    f = click.argument("args", nargs=-1, type=click.UNPROCESSED)(f)
    f = click.option("--debug", is_flag=True, help="Log the command before spawning")(f)
    f = click.option("--shell", default=None, help="Shell executable to run the command with")(f)
    f = click.option("--root", default=None, help="Working directory for the test process")(f)
    f = click.option("--config", "path_to_config", default=None, help="Passed on as --config <path>")(f)
    f = click.option("--command-line", default=None, help="Base test command, e.g. 'npm test --'")(f)
    f = click.option(
        "--settings",
        default=None,
        type=click.Path(dir_okay=False),
        help="YAML workspace settings file",
    )(f)
    return f


def _load_config(settings, command_line, path_to_config, root, shell, debug):
    if settings:
        workspace = config_mod.load_workspace(settings)
    else:
        workspace = config_mod.WorkspaceConfig()
    return config_mod.with_overrides(
        workspace,
        command_line=command_line,
        path_to_config=path_to_config,
        root_path=root,
        shell=shell,
        debug=True if debug else None,
    )


def _interrupt(proc):
    """Forward the interrupt to the test command.

    On POSIX the child leads its own process group (start_new_session), so
    the whole group is signalled.
    """
    if launcher.is_windows(sys.platform):
        proc.terminate()
        return
    try:
        os.killpg(proc.pid, signal.SIGINT)
    except ProcessLookupError:
        pass


def _exit_code(returncode: int) -> int:
    """Killed by signal N is reported as 128 + N, like a shell."""
    if returncode < 0:
        return 128 - returncode
    return returncode


@click.group()
@click.version_option(version=__version__, prog_name="jest-launch")
def main():
    """Launch a test command the way the editor integration does."""


@main.command(context_settings={"ignore_unknown_options": True})
@click.option("--dry-run", is_flag=True, help="Show what would be spawned without executing")
@_workspace_options
def run(dry_run, settings, command_line, path_to_config, root, shell, debug, args):
    """Spawn the test command with ARGS appended and wait for it."""
    try:
        workspace = _load_config(settings, command_line, path_to_config, root, shell, debug)
    except RuntimeError as e:
        log.error(str(e))
        sys.exit(1)

    if dry_run:
        invocation = launcher.build_invocation(
            workspace, list(args), dict(os.environ), sys.platform
        )
        opts = invocation.options
        log.info(f"Command: {invocation.command}")
        log.step(f"cwd: {opts.cwd or launcher.INHERITED_CWD}")
        log.step(f"shell: {opts.shell}")
        log.step(f"detached: {opts.detached}")
        sys.exit(0)

    try:
        proc = launcher.launch(workspace, list(args))
    except OSError as e:
        log.error(f"failed to start test command: {e}")
        sys.exit(127)
    try:
        returncode = proc.wait()
    except KeyboardInterrupt:
        log.error("interrupted, stopping test command")
        _interrupt(proc)
        proc.wait()
        sys.exit(130)
    sys.exit(_exit_code(returncode))


@main.command(context_settings={"ignore_unknown_options": True})
@_workspace_options
def show(settings, command_line, path_to_config, root, shell, debug, args):
    """Print the resolved spawn invocation as JSON."""
    try:
        workspace = _load_config(settings, command_line, path_to_config, root, shell, debug)
    except RuntimeError as e:
        log.error(str(e))
        sys.exit(1)

    invocation = launcher.build_invocation(workspace, list(args), dict(os.environ), sys.platform)
    opts = invocation.options
    click.echo(
        json.dumps(
            {
                "command": invocation.command,
                "args": invocation.args,
                "cwd": opts.cwd,
                "shell": opts.shell,
                "detached": opts.detached,
                "env_overrides": sorted(workspace.node_env or {}),
            },
            indent=2,
        )
    )


if __name__ == "__main__":
    main()
