"""Canonical Pydantic models shared across all specflat modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into two groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`OutputConfig`, :class:`FormatterConfig`, :class:`RequestConfig`,
    and :class:`GlobalConfig`.

**Parser output models** -- produced by :func:`specflat.parser.parse` and
consumed by code generators or routing-setup tools:
    :class:`HTTPMethod`, :class:`ModelRef`, :class:`RouteEntry`,
    :class:`MergedModel`, :class:`ModelRelation`, :class:`ParseResult`, and
    :class:`LoadedSpec`.

Schema definitions themselves (the values of ``refs`` and the descriptors in
``properties``) stay plain dicts: they are pieces of the input document and
are passed through untouched.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, Field


# --- Config ---


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class FormatterConfig(BaseModel):
    """Route and resource naming presets used when no formatter is passed explicitly.

    See :func:`~specflat.parser.formatters.build_formatter` for the
    meaning of each style.
    """

    path_style: str = Field(
        default="raw", description="Route string style: raw, express"
    )
    resource_style: str = Field(
        default="path", description="Resource grouping style: path, segment"
    )


class RequestConfig(BaseModel):
    """HTTP settings used by the loader when the document source is a URL."""

    timeout: float = Field(default=30.0, description="Request timeout in seconds")


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/specflat/config.json``.

    Loaded and saved by :func:`~specflat.config.load_global_config` and
    :func:`~specflat.config.save_global_config`. Fields here have the
    lowest precedence and can be overridden by project config, environment
    variables, or CLI flags. See :func:`~specflat.config.resolve_config`
    for the full precedence chain.
    """

    output: OutputConfig = Field(default_factory=OutputConfig)
    formatters: FormatterConfig = Field(default_factory=FormatterConfig)
    request: RequestConfig = Field(default_factory=RequestConfig)


# --- Parser Output Models ---


class HTTPMethod(str, enum.Enum):
    """HTTP verbs that participate in the route table.

    Any other key under a path item (``parameters``, vendor extensions) is
    ignored.  Operations are walked in the declaration order of this enum.
    """

    GET = "get"
    POST = "post"
    PUT = "put"
    DELETE = "delete"
    HEAD = "head"
    OPTIONS = "options"
    TRACE = "trace"
    PATCH = "patch"


class ModelRef(BaseModel):
    """A schema name used by a parameter or response of one operation.

    ``array`` is ``True`` when the schema was reached through an
    array-typed schema (``items.$ref``) rather than a direct ``$ref``.
    """

    model: str
    array: bool = False


class RouteEntry(BaseModel):
    """One operation in the route table."""

    method: HTTPMethod
    route: str
    params: list[ModelRef] = Field(default_factory=list)
    responses: list[ModelRef] = Field(default_factory=list)


class MergedModel(BaseModel):
    """A schema definition with its ``allOf`` chain folded in.

    ``required`` holds each field name once, sorted lexicographically.
    ``properties`` maps property names to their raw descriptors.
    """

    required: list[str] = Field(default_factory=list)
    properties: dict[str, Any] = Field(default_factory=dict)


class ModelRelation(BaseModel):
    """Records that *model_name* holds a property typed as another schema.

    ``plural`` marks an array-of-reference property; ``plural_form`` is
    then the property name (e.g. ``"pets"`` for ``items: {$ref: Pet}``).
    """

    model_name: str
    plural: bool = False
    plural_form: Optional[str] = None


class ParseResult(BaseModel):
    """The flattened views derived from one Swagger document.

    See Also:
        :func:`specflat.parser.parse`: The function that builds this.
    """

    basepath: Optional[str] = None
    resources: dict[str, list[RouteEntry]] = Field(default_factory=dict)
    refs: dict[str, Optional[dict[str, Any]]] = Field(
        default_factory=dict,
        description="Every schema reachable from an operation; None for dangling refs",
    )
    models: dict[str, MergedModel] = Field(default_factory=dict)


class LoadedSpec(BaseModel):
    """Output of the full text pipeline: the decoded document plus its parse."""

    loaded: dict[str, Any]
    parsed: ParseResult
    type: str = Field(description="Detected source format: json or yaml")
