"""Where specflat keeps its settings, and how the effective settings are chosen.

Files:

* ``config.json`` in the config directory holds the user's
  :class:`~specflat.models.GlobalConfig`.  The directory follows the XDG
  base-directory layout on Linux and the BSDs (``~/.config/specflat``) and
  is ``~/.specflat`` elsewhere.
* ``specflat.json`` in the working directory, if present, has the same shape
  and lets a repository pin its route and resource naming.
* Crash logs go under the data directory (``~/.local/share/specflat/logs``).

:func:`resolve_config` layers, lowest first: defaults, the user file, the
project file, ``SPECFLAT_*`` environment variables, CLI flags.

Writes go through :func:`_atomic_write` so an interrupted ``config set``
never leaves a truncated file behind.
"""

from __future__ import annotations

import contextlib
import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from specflat.exceptions import ConfigError
from specflat.models import GlobalConfig

_APP_NAME = "specflat"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "specflat.json"

ENV_FORMAT = "SPECFLAT_FORMAT"
ENV_PATH_STYLE = "SPECFLAT_PATH_STYLE"
ENV_RESOURCE_STYLE = "SPECFLAT_RESOURCE_STYLE"

# kind -> (XDG variable, default location under $HOME)
_XDG_DIRS: dict[str, tuple[str, tuple[str, ...]]] = {
    "config": ("XDG_CONFIG_HOME", (".config",)),
    "data": ("XDG_DATA_HOME", (".local", "share")),
}


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _app_dir(kind: str) -> Path:
    if _is_xdg_platform():
        env_var, default = _XDG_DIRS[kind]
        root = os.environ.get(env_var) or Path.home().joinpath(*default)
        path = Path(root) / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
        if kind == "data":
            path = path / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Directory holding ``config.json``; created on first use."""
    return _app_dir("config")


def get_data_dir() -> Path:
    """Directory for crash logs; created on first use."""
    return _app_dir("data")


def _atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* through a sibling temp file and ``os.replace``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise


def _read_json(path: Path, label: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Invalid {label} config at {path}: {exc}") from exc


def _global_config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Read the user's config file, or return defaults when there is none.

    Raises:
        ConfigError: If the file is not JSON or does not fit
            :class:`~specflat.models.GlobalConfig`.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    data = _read_json(path, "global")
    try:
        return GlobalConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    payload = json.dumps(config.model_dump(mode="json"), indent=2)
    _atomic_write(_global_config_path(), payload + "\n")


def load_project_config() -> Optional[dict[str, Any]]:
    """Read ``./specflat.json`` as a raw mapping, or ``None`` if absent.

    Raises:
        ConfigError: If the file is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    data = _read_json(path, "project")
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def resolve_config(
    cli_format: Optional[str] = None,
    cli_path_style: Optional[str] = None,
    cli_resource_style: Optional[str] = None,
) -> GlobalConfig:
    """Compute the effective configuration for one invocation.

    Layers, each overriding the one before:

    1. :class:`~specflat.models.GlobalConfig` defaults
    2. the user's ``config.json``
    3. ``./specflat.json``, merged one section deep
    4. ``SPECFLAT_FORMAT``, ``SPECFLAT_PATH_STYLE``,
       ``SPECFLAT_RESOURCE_STYLE`` (empty values are ignored)
    5. the ``cli_*`` arguments

    Nothing is written back.

    Raises:
        ConfigError: If a config file is unreadable or the merged result
            does not validate.
    """
    data = load_global_config().model_dump(mode="json")

    project = load_project_config()
    if project is not None:
        for section, values in project.items():
            if isinstance(values, dict) and isinstance(data.get(section), dict):
                data[section].update(values)
            else:
                data[section] = values

    overrides = (
        ("output", "format", os.environ.get(ENV_FORMAT), cli_format),
        ("formatters", "path_style", os.environ.get(ENV_PATH_STYLE), cli_path_style),
        ("formatters", "resource_style", os.environ.get(ENV_RESOURCE_STYLE), cli_resource_style),
    )
    for section, key, env_value, cli_value in overrides:
        if not isinstance(data.get(section), dict):
            # A malformed project section; validation below reports it
            continue
        if env_value:
            data[section][key] = env_value
        if cli_value is not None:
            data[section][key] = cli_value

    try:
        return GlobalConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
