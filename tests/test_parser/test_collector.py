"""Tests for specflat.parser.collector."""

from __future__ import annotations

from typing import Any

from specflat.models import ModelRelation
from specflat.parser.collector import collect_models, models_from_refs, related_models


class TestRelatedModels:
    def test_petstore_relations(self, petstore_raw: dict[str, Any]) -> None:
        relations = related_models(petstore_raw["definitions"])

        assert relations["Owner"] == [ModelRelation(model_name="Pet", plural=False)]
        assert relations["Pet"] == [
            ModelRelation(model_name="Owner", plural=True, plural_form="pets")
        ]
        assert relations["Tag"] == [
            ModelRelation(model_name="Catalog", plural=True, plural_form="tags")
        ]
        assert set(relations) == {"Owner", "Pet", "Tag"}

    def test_multiple_users_of_one_schema(self) -> None:
        definitions = {
            "Address": {"properties": {"line": {"type": "string"}}},
            "Person": {"properties": {"home": {"$ref": "#/definitions/Address"}}},
            "Company": {
                "properties": {
                    "sites": {"type": "array", "items": {"$ref": "#/definitions/Address"}}
                }
            },
        }
        relations = related_models(definitions)
        assert [r.model_name for r in relations["Address"]] == ["Person", "Company"]
        assert [r.plural for r in relations["Address"]] == [False, True]

    def test_definitions_without_properties(self) -> None:
        assert related_models({"Alias": {"type": "string"}, "Bad": None}) == {}


class TestModelsFromRefs:
    def test_only_definitions_with_properties(self) -> None:
        refs: dict[str, Any] = {
            "Pet": {"properties": {"name": {"type": "string"}}},
            "Wrapper": {"allOf": [{"$ref": "#/definitions/Pet"}]},
            "Ghost": None,
        }
        assert list(models_from_refs(refs)) == ["Pet"]


class TestCollectModels:
    def test_related_model_not_reached_by_paths(self, petstore_raw: dict[str, Any]) -> None:
        definitions = petstore_raw["definitions"]
        refs = {"Error": definitions["Error"]}

        models = collect_models(refs, definitions)

        assert "Error" in models
        assert "Tag" in models
        assert "Catalog" not in models

    def test_dangling_refs_are_not_models(self) -> None:
        definitions = {"A": {"properties": {"ghost": {"$ref": "#/definitions/Ghost"}}}}
        refs = {"A": definitions["A"], "Ghost": None}

        models = collect_models(refs, definitions)

        assert list(models) == ["A"]

    def test_wrapper_without_properties_dropped(self, person_dino_raw: dict[str, Any]) -> None:
        definitions = person_dino_raw["definitions"]
        refs = {name: definitions[name] for name in ("age", "dino", "newage")}

        models = collect_models(refs, definitions)

        assert set(models) == {"age", "dino"}
        assert models["dino"].required == ["age", "dietDictionaryInt32", "heightInt"]

    def test_every_model_is_flattened(self, petstore_raw: dict[str, Any]) -> None:
        definitions = petstore_raw["definitions"]
        models = collect_models({"Pet": definitions["Pet"]}, definitions)

        assert models["Pet"].required == ["id", "name"]
        assert list(models["Pet"].properties) == ["name", "tag", "id", "owner"]
        for model in models.values():
            assert isinstance(model.required, list)
            assert isinstance(model.properties, dict)

    def test_empty(self) -> None:
        assert collect_models({}, {}) == {}
