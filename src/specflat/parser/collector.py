"""Decide which schemas become top-level models, and flatten them.

A *model* is a named schema with a structural body (a ``properties`` map)
that a generator would materialise as a concrete type.  Candidates come from
two places:

1. **From paths** -- every reachable schema in ``refs`` that declares
   ``properties``.
2. **Related models** -- every schema that some definition uses as the type
   of a property (directly or as array items), even when no operation
   reaches it.

Candidates without a ``properties`` map (pure ``allOf`` wrappers, primitive
aliases, dangling references) are dropped.  Each survivor is flattened with
:func:`~specflat.parser.merger.merge_composition` using a fresh ``visited``
set.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from specflat.models import MergedModel, ModelRelation
from specflat.parser.merger import merge_composition
from specflat.parser.pointers import schema_reference

logger = logging.getLogger(__name__)


def related_models(definitions: dict[str, Any]) -> dict[str, list[ModelRelation]]:
    """Map each schema used as a property type to the schemas that use it.

    Args:
        definitions: The document's ``definitions`` object.

    Returns:
        ``{referenced_name: [ModelRelation, ...]}`` in definition order.
        A relation is ``plural`` when the property is an array of the
        referenced schema, in which case ``plural_form`` is the property
        name.

    Example::

        # Owner.properties.pets = {type: array, items: {$ref: Pet}}
        related_models(defs)["Pet"]
        # [ModelRelation(model_name="Owner", plural=True, plural_form="pets")]
    """
    relations: dict[str, list[ModelRelation]] = {}

    for model_name, definition in definitions.items():
        if not isinstance(definition, dict):
            continue
        properties = definition.get("properties")
        if not isinstance(properties, dict):
            continue

        for prop_name, descriptor in properties.items():
            found = schema_reference(descriptor)
            if found is None:
                continue
            target, plural = found
            relations.setdefault(target, []).append(
                ModelRelation(
                    model_name=model_name,
                    plural=plural,
                    plural_form=prop_name if plural else None,
                )
            )

    return relations


def models_from_refs(
    refs: dict[str, Optional[dict[str, Any]]],
) -> dict[str, dict[str, Any]]:
    """Reachable schemas that declare a ``properties`` map, unflattened."""
    return {name: definition for name, definition in refs.items() if _has_body(definition)}


def collect_models(
    refs: dict[str, Optional[dict[str, Any]]],
    definitions: dict[str, Any],
) -> dict[str, MergedModel]:
    """Compute the flattened model set.

    Args:
        refs: The transitive closure from
            :func:`~specflat.parser.resolver.resolve_refs`.
        definitions: The document's ``definitions`` object.

    Returns:
        Model name -> :class:`~specflat.models.MergedModel`.  Every value
        has a ``required`` list and a ``properties`` map, possibly empty.
    """
    candidates: dict[str, Optional[dict[str, Any]]] = dict(models_from_refs(refs))
    logger.debug("models from paths: %s", list(candidates))

    relations = related_models(definitions)
    logger.debug("related models: %s", list(relations))
    for name in relations:
        if name not in candidates:
            candidates[name] = definitions.get(name)

    return {
        name: merge_composition(definitions, name, set())
        for name, definition in candidates.items()
        if _has_body(definition)
    }


def _has_body(definition: Any) -> bool:
    return isinstance(definition, dict) and isinstance(definition.get("properties"), dict)
