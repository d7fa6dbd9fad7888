"""Walk the ``paths`` object and build the per-resource route table.

Each path is visited in document order, and under each path every
recognised HTTP verb (see :class:`~specflat.models.HTTPMethod`) in enum
order.  Every operation yields one :class:`~specflat.models.RouteEntry`
listing the schemas its parameters and responses use.

Only the ``200`` and ``default`` responses are modelled.  Other status codes
(``404``, ``500`` ...) are ignored even when they carry a schema.

While walking, every schema name found is recorded in a *seed* mapping
(name -> raw definition) which :func:`~specflat.parser.resolver.resolve_refs`
later grows into the full transitive closure.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from specflat.models import HTTPMethod, ModelRef, RouteEntry
from specflat.parser.formatters import RouteFormatter
from specflat.parser.pointers import schema_reference

logger = logging.getLogger(__name__)

MODELLED_RESPONSES = ("200", "default")


def walk_paths(
    paths: dict[str, Any],
    definitions: dict[str, Any],
    formatter: Optional[RouteFormatter] = None,
) -> tuple[dict[str, list[RouteEntry]], dict[str, Optional[dict[str, Any]]]]:
    """Build the route table and the seed reference set.

    Args:
        paths: The document's ``paths`` object.
        definitions: The document's ``definitions`` object, used to look up
            the raw definition of every referenced name.
        formatter: Route and resource naming.  Defaults to the identity
            :class:`~specflat.parser.formatters.RouteFormatter`.

    Returns:
        A ``(resources, seed_refs)`` tuple.  ``resources`` maps resource
        name to route entries in path-then-verb order.  ``seed_refs`` maps
        every name referenced by an operation to its raw definition, or to
        ``None`` when the name is missing from *definitions*.
    """
    formatter = formatter or RouteFormatter()
    resources: dict[str, list[RouteEntry]] = {}
    seed_refs: dict[str, Optional[dict[str, Any]]] = {}

    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue

        resource = formatter.format_resource(path)
        route = formatter.format_path(path)
        logger.debug("path %s becomes resource %r with route %r", path, resource, route)

        for method in HTTPMethod:
            operation = path_item.get(method.value)
            if not isinstance(operation, dict):
                continue

            params = _parameter_models(operation)
            responses = _response_models(operation)
            for ref in params + responses:
                if ref.model not in seed_refs:
                    seed_refs[ref.model] = definitions.get(ref.model)

            resources.setdefault(resource, []).append(
                RouteEntry(method=method, route=route, params=params, responses=responses)
            )

    return resources, seed_refs


def _parameter_models(operation: dict[str, Any]) -> list[ModelRef]:
    """Schemas used by the operation's parameters, in declaration order."""
    models: list[ModelRef] = []
    for param in operation.get("parameters") or []:
        if not isinstance(param, dict):
            continue
        found = schema_reference(param.get("schema"))
        if found is not None:
            models.append(ModelRef(model=found[0], array=found[1]))
    return models


def _response_models(operation: dict[str, Any]) -> list[ModelRef]:
    """Schemas used by the operation's ``200`` and ``default`` responses."""
    models: list[ModelRef] = []
    responses = operation.get("responses") or {}
    for status in MODELLED_RESPONSES:
        response = responses.get(status)
        if response is None and status.isdigit():
            # Unquoted YAML status codes load as ints
            response = responses.get(int(status))
        if not isinstance(response, dict):
            continue
        found = schema_reference(response.get("schema"))
        if found is not None:
            models.append(ModelRef(model=found[0], array=found[1]))
    return models
