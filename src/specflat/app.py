"""The ``specflat`` command line.

The root callback turns the global flags into an
:class:`~specflat.output.OutputManager`, wires library logging to stderr and
resolves the effective :class:`~specflat.models.GlobalConfig` into
``ctx.obj["config"]`` for the sub-commands:

* ``specflat parse SOURCE`` -- the full flattened result
* ``specflat inspect routes|refs|models|relations SOURCE`` -- one view as a table
* ``specflat config show|set|reset`` -- the user's config file

:func:`main` is the console-script entry point.  A
:class:`~specflat.exceptions.SpecflatError` that escapes a command ends the
process with that error's exit code; anything else leaves a crash log in the
data directory.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from specflat import __version__
from specflat.commands.config import config_app
from specflat.commands.inspect import inspect_app
from specflat.commands.parse import parse_command
from specflat.config import get_data_dir, resolve_config
from specflat.exceptions import ConfigError, SpecflatError
from specflat.exit_codes import EXIT_GENERIC_FAILURE
from specflat.models import GlobalConfig
from specflat.output import (
    OutputFormat,
    OutputManager,
    configure_logging,
    error,
    set_output,
    warning,
)

EXIT_INTERRUPTED = 130

app = typer.Typer(
    name="specflat",
    help="Flatten Swagger 2.0 documents into route tables and merged models.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"specflat {__version__}")
        raise typer.Exit()


def _flag_format(json_output: bool, plain_output: bool) -> Optional[str]:
    if json_output:
        return OutputFormat.JSON.value
    if plain_output:
        return OutputFormat.PLAIN.value
    return None


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Print the version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="Write data as JSON."),
    plain_output: bool = typer.Option(False, "--plain", help="Write data as plain text."),
    no_color: bool = typer.Option(False, "--no-color", help="Never use colour."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only warnings and errors on stderr."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Write data to this file instead of stdout."
    ),
) -> None:
    """Set up output, logging and configuration for the chosen command.

    A broken config file only produces a warning, so ``config reset``
    can still repair it.
    """
    problems: list[str] = []
    try:
        config = resolve_config(cli_format=_flag_format(json_output, plain_output))
    except ConfigError as exc:
        problems.append(str(exc))
        config = GlobalConfig()

    try:
        fmt = OutputFormat(config.output.format)
    except ValueError:
        problems.append(f"Unknown output format '{config.output.format}', using auto")
        fmt = OutputFormat.AUTO

    output = OutputManager(
        format=fmt,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
        output_file=output_file,
    )
    set_output(output)
    configure_logging(verbose, output.stderr_console)
    for problem in problems:
        warning(problem)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose


app.command("parse")(parse_command)
app.add_typer(inspect_app, name="inspect", help="Show one flattened view as a table.")
app.add_typer(config_app, name="config", help="Read or change the user config file.")


def _on_sigint(signum: int, frame: Any) -> None:  # noqa: ANN401
    sys.stderr.write("\nCancelled.\n")
    sys.exit(EXIT_INTERRUPTED)


def _setup_signal_handlers() -> None:
    signal.signal(signal.SIGINT, _on_sigint)


def _write_crash_log() -> str:
    """Save the active traceback under the data directory; return its path."""
    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    log_path.write_text(traceback.format_exc(), encoding="utf-8")
    return str(log_path)


def main() -> None:
    """Console-script entry point.

    Raises:
        SystemExit: Always, with the command's exit status.
    """
    _setup_signal_handlers()
    try:
        app()
    except SpecflatError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except Exception:
        error(f"Unexpected error. Debug log: {_write_crash_log()}")
        sys.exit(EXIT_GENERIC_FAILURE)
