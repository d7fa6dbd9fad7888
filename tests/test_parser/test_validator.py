"""Tests for specflat.parser.validator."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from specflat.exceptions import SpecConformanceError
from specflat.parser.validator import CONFORMANCE_MESSAGE, ensure_valid


def test_valid_json_document(person_dino_raw: dict[str, Any]) -> None:
    ensure_valid(person_dino_raw)


def test_valid_yaml_document(petstore_raw: dict[str, Any]) -> None:
    ensure_valid(petstore_raw)


def test_document_not_mutated(petstore_raw: dict[str, Any]) -> None:
    before = copy.deepcopy(petstore_raw)
    ensure_valid(petstore_raw)
    assert petstore_raw == before


def test_missing_required_section() -> None:
    with pytest.raises(SpecConformanceError) as exc_info:
        ensure_valid({"swagger": "2.0", "paths": {}})
    assert str(exc_info.value) == CONFORMANCE_MESSAGE
    assert exc_info.value.exit_code == 5
    assert exc_info.value.__cause__ is not None


def test_invalid_parameter(person_dino_raw: dict[str, Any]) -> None:
    person_dino_raw["paths"]["/persons"]["get"]["parameters"] = [{"name": "q"}]
    with pytest.raises(SpecConformanceError):
        ensure_valid(person_dino_raw)


def test_unknown_version() -> None:
    with pytest.raises(SpecConformanceError, match=CONFORMANCE_MESSAGE):
        ensure_valid({"info": {"title": "x", "version": "1"}, "paths": {}})


def test_unresolvable_reference() -> None:
    document = {
        "swagger": "2.0",
        "info": {"title": "ghosts", "version": "1"},
        "paths": {
            "/x": {
                "get": {
                    "responses": {
                        "200": {
                            "description": "ok",
                            "schema": {"$ref": "#/definitions/Ghost"},
                        }
                    }
                }
            }
        },
        "definitions": {},
    }
    with pytest.raises(SpecConformanceError, match=CONFORMANCE_MESSAGE) as exc_info:
        ensure_valid(document)
    assert exc_info.value.__cause__ is not None
