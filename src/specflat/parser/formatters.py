"""Pluggable route and resource naming.

:func:`~specflat.parser.paths.walk_paths` never formats paths itself; it asks
a :class:`RouteFormatter` for two strings per raw Swagger path:

* :meth:`RouteFormatter.format_path` -- the route string stored on each
  :class:`~specflat.models.RouteEntry`.
* :meth:`RouteFormatter.format_resource` -- the key the entry is grouped
  under in ``resources``.

The base class is the identity in both roles.  Callers can pass plain
callables to it, subclass it, or pick a named preset through
:func:`build_formatter`.
"""

from __future__ import annotations

import re
from typing import Callable, Optional

from specflat.exceptions import InvalidUsageError

PATH_STYLES = ("raw", "express")
RESOURCE_STYLES = ("path", "segment")

_TEMPLATE_RE = re.compile(r"\{([^}/]+)\}")
_FIRST_SEGMENT_RE = re.compile(r"^/*([^/]+)")


class RouteFormatter:
    """Formats raw Swagger paths into route strings and resource names.

    Args:
        path_formatter: Optional callable applied by :meth:`format_path`.
        resource_formatter: Optional callable applied by
            :meth:`format_resource`.

    Example::

        formatter = RouteFormatter(
            path_formatter=lambda p: p.replace("{", ":").replace("}", ""),
            resource_formatter=lambda p: p.strip("/").split("/")[0],
        )
    """

    def __init__(
        self,
        path_formatter: Optional[Callable[[str], str]] = None,
        resource_formatter: Optional[Callable[[str], str]] = None,
    ) -> None:
        self._path_formatter = path_formatter
        self._resource_formatter = resource_formatter

    def format_path(self, path: str) -> str:
        if self._path_formatter is not None:
            return self._path_formatter(path)
        return path

    def format_resource(self, path: str) -> str:
        if self._resource_formatter is not None:
            return self._resource_formatter(path)
        return path


class ExpressFormatter(RouteFormatter):
    """Route strings in Express style: ``/pets/{petId}`` -> ``/pets/:petId``."""

    def format_path(self, path: str) -> str:
        return _TEMPLATE_RE.sub(r":\1", path)


class SegmentResourceFormatter(RouteFormatter):
    """Groups routes by their first path segment: ``/pets/{petId}`` -> ``pets``.

    A path with no segment at all (``/``) keeps the raw path as its name.
    """

    def format_resource(self, path: str) -> str:
        match = _FIRST_SEGMENT_RE.match(path)
        return match.group(1) if match else path


def build_formatter(path_style: str = "raw", resource_style: str = "path") -> RouteFormatter:
    """Build a formatter from the preset names stored in configuration.

    Args:
        path_style: ``raw`` keeps the Swagger path, ``express`` rewrites
            ``{param}`` templates to ``:param``.
        resource_style: ``path`` groups by the raw path, ``segment`` groups
            by the first path segment.

    Raises:
        InvalidUsageError: If either style name is unknown.
    """
    if path_style not in PATH_STYLES:
        raise InvalidUsageError(
            f"Unknown path style '{path_style}'. Choose from: {', '.join(PATH_STYLES)}"
        )
    if resource_style not in RESOURCE_STYLES:
        raise InvalidUsageError(
            f"Unknown resource style '{resource_style}'. "
            f"Choose from: {', '.join(RESOURCE_STYLES)}"
        )

    path_fn = ExpressFormatter().format_path if path_style == "express" else None
    resource_fn = (
        SegmentResourceFormatter().format_resource if resource_style == "segment" else None
    )
    return RouteFormatter(path_formatter=path_fn, resource_formatter=resource_fn)
