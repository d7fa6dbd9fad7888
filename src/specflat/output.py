"""Terminal output for the specflat CLI.

Two streams, two jobs:

* **stdout** carries the flattened result (JSON, tab-separated text, or a
  Rich table / highlighted JSON), so ``specflat --json parse api.yaml | jq``
  keeps working.
* **stderr** carries diagnostics: progress notes, warnings, errors, and
  ``--verbose`` debug records from the library loggers.

Colour is dropped when ``NO_COLOR`` is set, ``TERM=dumb``, or ``--no-color``
is passed; ``auto`` format becomes ``plain`` whenever stdout is not a TTY.

:func:`~specflat.app.main_callback` builds one :class:`OutputManager` per
invocation and installs it with :func:`set_output`; command modules use the
module-level shortcuts (:func:`info`, :func:`error`, :func:`format_response`
...).  Library code never prints; it logs, and :func:`configure_logging`
decides where those records go.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import Iterator
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """How stdout data is rendered. ``AUTO`` picks ``RICH`` or ``PLAIN``."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


# level -> (rich style, plain prefix, silenced by --quiet)
_LEVELS: dict[str, tuple[str, str, bool]] = {
    "info": ("", "", True),
    "success": ("green", "", True),
    "warning": ("yellow", "Warning: ", False),
    "error": ("bold red", "Error: ", False),
    "debug": ("dim", "[debug] ", False),
}


class OutputManager:
    """Per-invocation output settings and the two Rich consoles.

    Args:
        format: Requested stdout format; ``AUTO`` is resolved here.
        no_color: Force colourless output even on a TTY.
        quiet: Drop ``info`` and ``success`` diagnostics.
        verbose: Show ``debug`` diagnostics.
        output_file: Send data to this file instead of stdout.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
        output_file: Optional[str] = None,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._output_file = output_file
        self._format = _resolve_format(format, self._no_color)

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=self._format is OutputFormat.RICH,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    @property
    def stderr_console(self) -> Console:
        """Diagnostics console; :func:`configure_logging` writes through it."""
        return self._stderr

    # --- data (stdout) ---

    def format_response(self, data: Any) -> None:
        """Render a JSON-compatible structure in the active format.

        With an ``output_file`` the structure is written there as JSON,
        replacing any previous content, and nothing reaches stdout.
        """
        if self._output_file:
            _write_json_file(self._output_file, data)
        elif self._format is OutputFormat.PLAIN:
            for line in _plain_lines(data):
                self.print_data(line)
        elif self._format is OutputFormat.JSON:
            self.print_data(_to_json(data))
        else:
            self._stdout.print(Syntax(_to_json(data), "json", word_wrap=True))

    def print_data(self, text: str) -> None:
        """Emit one chunk of data text, appending to ``output_file`` if set."""
        if self._output_file:
            with open(self._output_file, "a", encoding="utf-8") as fh:
                fh.write(text + "\n")
        else:
            print(text, file=sys.stdout, flush=True)

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Render rows as a Rich table, a JSON array of objects, or TSV.

        The title is only shown in Rich mode.
        """
        if self._format is OutputFormat.JSON:
            self.print_data(_to_json([dict(zip(headers, row)) for row in rows]))
            return
        if self._format is OutputFormat.PLAIN:
            for row in [headers, *rows]:
                self.print_data("\t".join(row))
            return

        table = Table(*headers, title=title, header_style="bold cyan")
        for row in rows:
            table.add_row(*row)
        self._stdout.print(table)

    # --- diagnostics (stderr) ---

    def info(self, message: str) -> None:
        self._diagnostic("info", message)

    def success(self, message: str) -> None:
        self._diagnostic("success", message)

    def warning(self, message: str) -> None:
        self._diagnostic("warning", message)

    def error(self, message: str) -> None:
        self._diagnostic("error", message)

    def debug(self, message: str) -> None:
        self._diagnostic("debug", message)

    def _diagnostic(self, level: str, message: str) -> None:
        style, prefix, quietable = _LEVELS[level]
        if quietable and self._quiet:
            return
        if level == "debug" and not self._verbose:
            return

        text = prefix + message
        if self._no_color:
            print(text, file=sys.stderr, flush=True)
        else:
            self._stderr.print(text, style=style or None, markup=False, highlight=False)


def _resolve_format(requested: OutputFormat, no_color: bool) -> OutputFormat:
    if requested is not OutputFormat.AUTO:
        return requested
    if _is_tty() and not no_color:
        return OutputFormat.RICH
    return OutputFormat.PLAIN


def _plain_lines(data: Any) -> Iterator[str]:
    """``key<TAB>value`` for mappings, one item per line for lists."""
    if isinstance(data, dict):
        for key, value in data.items():
            if isinstance(value, (dict, list)):
                value = json.dumps(value, ensure_ascii=False, default=str)
            yield f"{key}\t{value}"
    elif isinstance(data, list):
        yield from (str(item) for item in data)
    else:
        yield str(data)


def _write_json_file(path: str, data: Any) -> None:
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(_to_json(data) + "\n")


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is present (any value) or ``TERM`` is ``dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


def configure_logging(verbose: bool, console: Optional[Console] = None) -> None:
    """Send ``specflat.*`` log records to stderr through Rich.

    DEBUG and up with *verbose*, WARNING and up otherwise.  Repeated calls
    replace the handler rather than stacking another one.
    """
    logger = logging.getLogger("specflat")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    logger.addHandler(
        RichHandler(
            console=console or Console(stderr=True),
            show_time=False,
            show_path=False,
        )
    )
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


# --- process-wide instance ---

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """The installed manager, or a default one created on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager (tests call this between cases)."""
    global _output
    _output = None


def format_response(data: Any) -> None:
    get_output().format_response(data)


def print_table(
    headers: list[str],
    rows: list[list[str]],
    title: Optional[str] = None,
) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
