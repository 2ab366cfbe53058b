"""Schema value model tests."""

from __future__ import annotations

import json

import pytest
from schema_reflector.schema_management import (
    Schema,
    SchemaModelError,
    definition_uri,
    false_schema,
    join_schema_id,
    true_schema,
)


def test_to_dict_uses_json_schema_keywords() -> None:
    schema = Schema(
        type="object",
        properties={"name": Schema(type="string", min_length=1)},
        additional_properties=false_schema(),
        required=["name"],
    )

    assert schema.to_dict() == {
        "type": "object",
        "properties": {"name": {"type": "string", "minLength": 1}},
        "additionalProperties": False,
        "required": ["name"],
    }


def test_boolean_schemas_serialize_as_literals() -> None:
    assert true_schema().to_dict() is True
    assert false_schema().to_dict() is False
    assert Schema(items=true_schema(), type="array").to_dict() == {
        "items": True,
        "type": "array",
    }


def test_null_default_and_const_are_emitted() -> None:
    schema = Schema(type="null", default=None, const=None)

    assert schema.has_default
    assert schema.has_const
    assert schema.to_dict() == {"type": "null", "const": None, "default": None}


def test_clear_const_removes_keyword() -> None:
    schema = Schema(const="fixed")
    schema.clear_const()

    assert not schema.has_const
    assert schema.to_dict() == {}


def test_reference_with_structural_keywords_is_rejected() -> None:
    schema = Schema.reference(definition_uri("User"))
    schema.type = "object"

    with pytest.raises(SchemaModelError, match="type"):
        schema.to_dict()


def test_reference_keeps_annotations_and_definitions() -> None:
    schema = Schema.reference("#/$defs/User")
    schema.description = "Account owner"
    schema.definitions = {"User": Schema(type="object")}

    assert schema.to_dict() == {
        "$ref": "#/$defs/User",
        "$defs": {"User": {"type": "object"}},
        "description": "Account owner",
    }


def test_extras_do_not_override_known_keywords() -> None:
    schema = Schema(type="string", extras={"x-order": 3, "type": "integer"})

    assert schema.to_dict() == {"type": "string", "x-order": 3}


def test_is_empty_only_for_schemas_without_keywords() -> None:
    assert Schema().is_empty()
    assert not Schema(description="text").is_empty()
    assert not Schema(extras={"x": 1}).is_empty()
    assert not false_schema().is_empty()
    assert not Schema(default=None).is_empty()


def test_copy_detaches_top_level_containers() -> None:
    original = Schema(type="object", properties={"a": Schema(type="string")}, required=["a"])

    duplicate = original.copy()
    duplicate.properties["b"] = Schema(type="integer")
    duplicate.required.append("b")

    assert list(original.properties) == ["a"]
    assert original.required == ["a"]


def test_to_json_produces_parseable_document() -> None:
    schema = Schema(version="https://json-schema.org/draft/2020-12/schema", type="string")

    assert json.loads(schema.to_json()) == {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "string",
    }
    assert "\n" not in schema.to_json(indent=None)


def test_join_schema_id_uses_single_separator() -> None:
    assert join_schema_id("https://example.com/schemas/", "/user") == (
        "https://example.com/schemas/user"
    )
    assert join_schema_id("https://example.com", "user") == "https://example.com/user"
