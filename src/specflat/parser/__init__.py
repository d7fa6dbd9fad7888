"""Swagger flattening engine -- routes, reference closure, and merged models.

This sub-package turns a Swagger 2.0 document into a
:class:`~specflat.models.ParseResult`.

Typical usage::

    from specflat.parser import parse, parse_source

    result = parse(document)                     # already validated dict
    loaded = parse_source("api/swagger.yaml")    # load + decode + validate + parse

Sub-modules:

* :mod:`~specflat.parser.paths` -- walks paths x verbs into route entries.
* :mod:`~specflat.parser.resolver` -- transitive closure of ``$ref`` targets.
* :mod:`~specflat.parser.merger` -- cycle-safe ``allOf`` flattening.
* :mod:`~specflat.parser.collector` -- picks and flattens top-level models.
* :mod:`~specflat.parser.formatters` -- pluggable route/resource naming.
* :mod:`~specflat.parser.loader` -- URL and file loading.
* :mod:`~specflat.parser.validator` -- meta-schema validation.
* :mod:`~specflat.parser.pipeline` -- entry points composing the above.
"""

from specflat.parser.formatters import (
    ExpressFormatter,
    RouteFormatter,
    SegmentResourceFormatter,
    build_formatter,
)
from specflat.parser.loader import load_source, load_source_async, validate_source
from specflat.parser.pipeline import (
    decode_document,
    parse,
    parse_source,
    parse_source_async,
    parse_text,
)

__all__ = [
    "ExpressFormatter",
    "RouteFormatter",
    "SegmentResourceFormatter",
    "build_formatter",
    "decode_document",
    "load_source",
    "load_source_async",
    "parse",
    "parse_source",
    "parse_source_async",
    "parse_text",
    "validate_source",
]
