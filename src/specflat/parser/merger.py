"""Flatten ``allOf`` composition into a single required list and properties map.

A Swagger definition can declare itself as the union of base schemas and
inline fragments::

    Dino:
      allOf:
        - $ref: '#/definitions/Animal'
        - required: [height]
          properties: {height: {type: integer}}
      properties:
        diet: {type: string}

:func:`merge_composition` folds each ``allOf`` element into an accumulator in
list order, recursing into referenced base schemas, and folds the
definition's own top-level ``required``/``properties`` last.

Folding rules:

* ``required`` is a set union; the result is sorted for determinism.
* ``properties`` is a dict update, so the **last folded fragment wins** on a
  name collision.  The definition's own properties therefore override
  inherited ones, and a later ``allOf`` element overrides an earlier one.

A base schema already merged within the same call is skipped silently.
This makes cyclic chains (``A -> B -> A``) terminate, at the cost of not
resolving them meaningfully.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from specflat.models import MergedModel
from specflat.parser.pointers import ref_name

logger = logging.getLogger(__name__)


def merge_composition(
    definitions: dict[str, Any],
    name: str,
    visited: Optional[set[str]] = None,
) -> MergedModel:
    """Merge *name* with every schema it composes through ``allOf``.

    Args:
        definitions: The document's ``definitions`` object.
        name: The definition to flatten.  An unknown name yields an empty
            :class:`~specflat.models.MergedModel`.
        visited: Base-schema names already merged in this call chain.
            Pass ``None`` (or a fresh set) for each top-level merge; the set
            is filled in as the recursion proceeds.

    Returns:
        The flattened model.
    """
    if visited is None:
        visited = set()
    required: set[str] = set()
    properties: dict[str, Any] = {}
    _fold_definition(definitions, name, visited, required, properties)
    return MergedModel(required=sorted(required), properties=properties)


def _fold_definition(
    definitions: dict[str, Any],
    name: str,
    visited: set[str],
    required: set[str],
    properties: dict[str, Any],
) -> None:
    definition = definitions.get(name)
    if not isinstance(definition, dict):
        logger.debug("cannot merge unknown definition %r", name)
        return

    for element in definition.get("allOf") or []:
        if not isinstance(element, dict):
            continue
        ref = element.get("$ref")
        if ref:
            base = ref_name(ref)
            if base in visited:
                logger.debug("skipping already merged base %r of %r", base, name)
            else:
                visited.add(base)
                _fold_definition(definitions, base, visited, required, properties)
        _fold(required, properties, element.get("required"), element.get("properties"))

    _fold(required, properties, definition.get("required"), definition.get("properties"))


def _fold(
    required: set[str],
    properties: dict[str, Any],
    new_required: Any,
    new_properties: Any,
) -> None:
    if new_required:
        required.update(new_required)
    if isinstance(new_properties, dict):
        properties.update(new_properties)
