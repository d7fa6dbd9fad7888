"""Entry points: flatten a document, or run the whole load/decode/validate pipeline.

:func:`parse` is the pure core.  It takes an already validated document and
composes the steps in order:

1. :func:`~specflat.parser.paths.walk_paths` -- route table + seed refs.
2. :func:`~specflat.parser.resolver.resolve_refs` -- transitive closure.
3. :func:`~specflat.parser.collector.collect_models` -- flattened models.

It does no I/O, keeps no state between calls and never mutates its input,
so independent documents can be parsed concurrently.

The remaining functions wrap the collaborators around it:
:func:`decode_document` (JSON, then YAML), :func:`parse_text` (decode,
validate, parse) and :func:`parse_source` / :func:`parse_source_async`
(load, then :func:`parse_text`).
"""

from __future__ import annotations

import copy
import json
import logging
from typing import Any, Optional

import yaml

from specflat.exceptions import SpecFormatError
from specflat.models import LoadedSpec, ParseResult
from specflat.parser.collector import collect_models
from specflat.parser.formatters import RouteFormatter
from specflat.parser.loader import Reader, is_yaml_source, load_source, load_source_async
from specflat.parser.paths import walk_paths
from specflat.parser.resolver import resolve_refs
from specflat.parser.validator import ensure_valid

logger = logging.getLogger(__name__)

FORMAT_MESSAGE = "document not in expected json or yaml format"


def parse(
    document: dict[str, Any],
    formatter: Optional[RouteFormatter] = None,
) -> ParseResult:
    """Derive the route table, reference closure and flattened models.

    Args:
        document: A decoded, already validated Swagger 2.0 document.
            Missing ``paths``, ``definitions`` and ``basePath`` are treated
            as empty.
        formatter: Route and resource naming; identity when omitted.

    Returns:
        A :class:`~specflat.models.ParseResult`.

    Example::

        result = parse(document, ExpressFormatter())
        result.resources["/pets/{petId}"][0].route   # "/pets/:petId"
    """
    document = copy.deepcopy(document)
    paths = document.get("paths") or {}
    definitions = document.get("definitions") or {}

    resources, seed_refs = walk_paths(paths, definitions, formatter)
    refs = resolve_refs(seed_refs, definitions)
    models = collect_models(refs, definitions)
    logger.debug(
        "parsed %d resources, %d refs, %d models", len(resources), len(refs), len(models)
    )

    return ParseResult(
        basepath=document.get("basePath") or None,
        resources=resources,
        refs=refs,
        models=models,
    )


def decode_document(text: str, hint: str = "") -> tuple[dict[str, Any], str]:
    """Decode document text as JSON, falling back to YAML.

    Args:
        text: Raw document text.
        hint: ``"yaml"`` to skip the JSON attempt.

    Returns:
        ``(document, type)`` where *type* is ``"json"`` or ``"yaml"``.

    Raises:
        SpecFormatError: If the text is neither, or does not hold a mapping.
    """
    if hint != "yaml":
        try:
            loaded = json.loads(text)
        except json.JSONDecodeError:
            pass
        else:
            if isinstance(loaded, dict):
                return loaded, "json"
            raise SpecFormatError(FORMAT_MESSAGE)

    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SpecFormatError(FORMAT_MESSAGE) from exc
    if not isinstance(loaded, dict):
        raise SpecFormatError(FORMAT_MESSAGE)
    return loaded, "yaml"


def parse_text(
    text: str,
    formatter: Optional[RouteFormatter] = None,
    hint: str = "",
) -> LoadedSpec:
    """Decode, validate and parse document text.

    Raises:
        SpecFormatError: If the text is neither JSON nor YAML.
        SpecConformanceError: If the document fails validation.
    """
    loaded, doc_type = decode_document(text, hint)
    ensure_valid(loaded)
    return LoadedSpec(loaded=loaded, parsed=parse(loaded, formatter), type=doc_type)


def parse_source(
    source: str,
    formatter: Optional[RouteFormatter] = None,
    reader: Optional[Reader] = None,
    timeout: float = 30.0,
) -> LoadedSpec:
    """Load a document from a URL or path, then :func:`parse_text` it.

    Raises:
        SpecLoadError: If the document cannot be retrieved.
        SpecFormatError: If the text is neither JSON nor YAML.
        SpecConformanceError: If the document fails validation.
    """
    text = load_source(source, reader=reader, timeout=timeout)
    return parse_text(text, formatter, hint="yaml" if is_yaml_source(source) else "")


async def parse_source_async(
    source: str,
    formatter: Optional[RouteFormatter] = None,
    reader: Optional[Reader] = None,
    timeout: float = 30.0,
) -> LoadedSpec:
    """Async counterpart of :func:`parse_source`."""
    text = await load_source_async(source, reader=reader, timeout=timeout)
    return parse_text(text, formatter, hint="yaml" if is_yaml_source(source) else "")
