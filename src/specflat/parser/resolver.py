"""Grow the seed reference set into its transitive closure.

Starting from the schemas operations use directly, every property that is a
``$ref`` or an array of ``$ref`` pulls its target into the set, and the
target's own properties are examined in turn, until nothing new turns up.

The closure is computed with a worklist of newly added names, so each
definition is scanned exactly once.  It terminates because every name is
added at most once and names are drawn from a finite ``definitions`` map
(plus dangling names, which have no properties to follow).

Only top-level ``properties`` are followed.  References that appear inside
``allOf`` elements are the concern of
:func:`~specflat.parser.merger.merge_composition`, not of this closure.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Optional

from specflat.parser.pointers import schema_reference

logger = logging.getLogger(__name__)


def resolve_refs(
    seed_refs: dict[str, Optional[dict[str, Any]]],
    definitions: dict[str, Any],
) -> dict[str, Optional[dict[str, Any]]]:
    """Return the transitive closure of *seed_refs* over property references.

    Args:
        seed_refs: Mapping of name -> raw definition for the schemas used
            directly by operations (from
            :func:`~specflat.parser.paths.walk_paths`).  Not modified.
        definitions: The document's ``definitions`` object.

    Returns:
        A new mapping containing every seed entry plus every schema reachable
        from them.  A referenced name missing from *definitions* maps to
        ``None``.  Insertion order is discovery order.

    Example::

        refs = resolve_refs({"Order": defs["Order"]}, defs)
        # refs now also holds "Customer" if Order.customer is {$ref: Customer}
    """
    refs = dict(seed_refs)
    pending = deque(refs)

    while pending:
        name = pending.popleft()
        for child in referenced_names(refs[name]):
            if child in refs:
                continue
            refs[child] = definitions.get(child)
            if refs[child] is None:
                logger.debug("dangling reference %r from %r", child, name)
            else:
                logger.debug("found ref %r via %r", child, name)
            pending.append(child)

    return refs


def referenced_names(definition: Optional[dict[str, Any]]) -> list[str]:
    """Names referenced by *definition*'s properties, directly or as array items."""
    if not isinstance(definition, dict):
        return []
    properties = definition.get("properties")
    if not isinstance(properties, dict):
        return []

    names: list[str] = []
    for descriptor in properties.values():
        found = schema_reference(descriptor)
        if found is not None:
            names.append(found[0])
    return names
