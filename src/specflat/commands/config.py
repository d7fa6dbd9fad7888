"""``specflat config`` -- read and edit the user's config file.

Only the user file (``config.json``) is touched.  Project files and
``SPECFLAT_*`` variables still apply on top of it when a command runs.
"""

from __future__ import annotations

from typing import Any

import typer

from specflat.exceptions import InvalidUsageError, SpecflatError
from specflat.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)

# Keys whose values must be a preset name
_CHOICES: dict[str, tuple[str, ...]] = {
    "output.format": ("auto", "json", "plain", "rich"),
    "formatters.path_style": ("raw", "express"),
    "formatters.resource_style": ("path", "segment"),
}


def _assign(data: dict[str, Any], key: str, raw: str) -> Any:
    """Store *raw* at dotted *key* inside *data* and return the stored value.

    Numbers are converted to the type already held at that key.

    Raises:
        InvalidUsageError: For an unknown key, a value outside the allowed
            presets, or a value that is not a number where one is expected.
    """
    *parents, leaf = key.split(".")
    section = data
    for part in parents:
        section = section.get(part)
        if not isinstance(section, dict):
            raise InvalidUsageError(f"Invalid config key: {key}")
    if leaf not in section or isinstance(section[leaf], dict):
        raise InvalidUsageError(f"Unknown config key: {key}")

    allowed = _CHOICES.get(key)
    if allowed and raw not in allowed:
        raise InvalidUsageError(
            f"Invalid value for {key}: {raw}. Choose from: {', '.join(allowed)}"
        )

    current = section[leaf]
    value: Any = raw
    if isinstance(current, (int, float)) and not isinstance(current, bool):
        try:
            value = type(current)(raw)
        except ValueError:
            raise InvalidUsageError(
                f"Expected {type(current).__name__} for {key}, got: {raw}"
            ) from None
    section[leaf] = value
    return value


@config_app.command("show")
def config_show() -> None:
    """Print the stored configuration (config directory goes to stderr).

    Example::

        specflat -q --json config show
    """
    from specflat.config import get_config_dir, load_global_config

    try:
        config = load_global_config()
    except SpecflatError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    info(f"Config directory: {get_config_dir()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Dotted key, e.g. 'formatters.path_style'."),
    value: str = typer.Argument(help="New value."),
) -> None:
    """Change one setting and save it.

    Example::

        specflat config set formatters.path_style express
        specflat config set request.timeout 10
    """
    from specflat.config import load_global_config, save_global_config
    from specflat.models import GlobalConfig

    try:
        data = load_global_config().model_dump(mode="json")
        stored = _assign(data, key, value)
        new_config = GlobalConfig.model_validate(data)
    except SpecflatError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    except ValueError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=InvalidUsageError.exit_code) from None

    save_global_config(new_config)
    success(f"Set {key} = {stored}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Do not ask first."),
) -> None:
    """Overwrite the config file with defaults."""
    from specflat.config import save_global_config
    from specflat.models import GlobalConfig

    if not force and not typer.confirm("Reset all config to defaults?"):
        info("Cancelled.")
        raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
