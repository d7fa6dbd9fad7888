"""Helpers for reading ``$ref`` pointers and path templates.

Swagger 2.0 references point at ``#/definitions/<Name>``.  The flattening
engine only ever needs the trailing name, and only ever looks in two places
for it: a direct ``$ref`` on the schema, or a ``$ref`` on the schema's
``items`` (an array of that schema).
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Any, Optional


def ref_name(ref: str) -> str:
    """Return the schema name a ``$ref`` points at.

    Example::

        >>> ref_name("#/definitions/Pet")
        'Pet'
    """
    return ref.split("/")[-1]


def schema_reference(schema: Any) -> Optional[tuple[str, bool]]:
    """Return ``(name, is_array)`` for a schema that references a definition.

    Args:
        schema: A parameter/response ``schema`` or a property descriptor.

    Returns:
        ``(name, False)`` for ``{"$ref": ...}``, ``(name, True)`` for
        ``{"items": {"$ref": ...}}``, or ``None`` for anything else
        (primitive types, inline objects, missing schemas).
    """
    if not isinstance(schema, dict):
        return None
    if schema.get("$ref"):
        return ref_name(schema["$ref"]), False
    items = schema.get("items")
    if isinstance(items, dict) and items.get("$ref"):
        return ref_name(items["$ref"]), True
    return None


def id_name(path: str) -> Optional[str]:
    """Return the trailing path template name, if the path ends in one.

    Example::

        >>> id_name("/pets/{petId}")
        'petId'
        >>> id_name("/pets") is None
        True
    """
    name = path.split("{")[-1]
    if not name.endswith("}"):
        return None
    return name.split("}")[0]


def base_name(path: str) -> str:
    """File name of *path* without any extension (``/a/b/test.txt`` -> ``test``)."""
    return PurePosixPath(path).name.split(".")[0]
