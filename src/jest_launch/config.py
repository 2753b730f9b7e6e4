"""Parse workspace settings into a WorkspaceConfig."""

import os
from dataclasses import dataclass, replace

import yaml


@dataclass(frozen=True)
class WorkspaceConfig:
    command_line: str = ""
    path_to_config: str | None = None
    node_env: dict[str, str] | None = None
    shell: bool | str | None = None
    root_path: str | None = None
    debug: bool = False


# settings key → field name; first key present wins
_KEYS = {
    "command_line": ("jestCommandLine", "commandLine", "command_line"),
    "path_to_config": ("pathToConfig", "path_to_config"),
    "node_env": ("nodeEnv", "node_env"),
    "shell": ("shell",),
    "root_path": ("rootPath", "root_path"),
    "debug": ("debug",),
}


def _get_setting(settings: dict, field: str, default=None):
    """Get a setting by any of its accepted key spellings."""
    for key in _KEYS[field]:
        if key in settings:
            return settings[key]
    return default


def _parse_node_env(value) -> dict[str, str] | None:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise RuntimeError("workspace settings: nodeEnv must be a mapping")
    return {str(k): str(v) for k, v in value.items()}


def parse_workspace(settings: dict) -> WorkspaceConfig:
    """Parse a settings dict into a WorkspaceConfig.

    Accepts the editor's camelCase keys (jestCommandLine / commandLine,
    pathToConfig, nodeEnv, shell, rootPath, debug) as well as the
    snake_case field names. Unknown keys are ignored.
    """
    command_line = _get_setting(settings, "command_line")
    path_to_config = _get_setting(settings, "path_to_config")
    root_path = _get_setting(settings, "root_path")

    return WorkspaceConfig(
        command_line=str(command_line) if command_line is not None else "",
        path_to_config=str(path_to_config) if path_to_config is not None else None,
        node_env=_parse_node_env(_get_setting(settings, "node_env")),
        shell=_get_setting(settings, "shell"),
        root_path=str(root_path) if root_path is not None else None,
        debug=bool(_get_setting(settings, "debug", False)),
    )


def load_workspace(path: str) -> WorkspaceConfig:
    """Load a YAML settings file. Relative rootPath resolves against the file's directory."""
    try:
        with open(path) as f:
            settings = yaml.safe_load(f)
    except FileNotFoundError:
        raise RuntimeError(f"workspace settings not found: {path}")
    except yaml.YAMLError as e:
        raise RuntimeError(f"workspace settings invalid: {path}: {e}")

    if settings is None:
        settings = {}
    if not isinstance(settings, dict):
        raise RuntimeError(f"workspace settings must be a mapping: {path}")

    config = parse_workspace(settings)
    if config.root_path is not None and not os.path.isabs(config.root_path):
        base = os.path.dirname(os.path.abspath(path))
        config = replace(config, root_path=os.path.normpath(os.path.join(base, config.root_path)))
    return config


def with_overrides(config: WorkspaceConfig, **overrides) -> WorkspaceConfig:
    """Return a copy of config with every non-None override applied."""
    changes = {k: v for k, v in overrides.items() if v is not None}
    return replace(config, **changes)
