"""Constraint extraction tests."""

from __future__ import annotations

import pytest
from schema_reflector.constraints import extract_constraints
from schema_reflector.schema_management import Schema, true_schema


def _extract(tag: str, schema: Schema):
    return extract_constraints(tag, schema, type_name="User", field_name="name")


def test_string_keywords_are_applied() -> None:
    outcome = _extract(
        "minLength=1,maxLength=20,pattern=^[a-z]+$,format=email", Schema(type="string")
    )

    assert outcome.diagnostics == ()
    assert outcome.schema.to_dict() == {
        "type": "string",
        "minLength": 1,
        "maxLength": 20,
        "pattern": "^[a-z]+$",
        "format": "email",
    }


def test_input_schema_is_not_mutated() -> None:
    original = Schema(type="string")

    _extract("minLength=3", original)

    assert original.min_length is None


def test_numeric_keywords_and_coerced_enum() -> None:
    outcome = _extract(
        "minimum=1,exclusiveMaximum=10.5,multipleOf=2,enum=2,enum=4,default=4",
        Schema(type="integer"),
    )

    assert outcome.schema.to_dict() == {
        "type": "integer",
        "enum": [2, 4],
        "multipleOf": 2,
        "exclusiveMaximum": 10.5,
        "minimum": 1,
        "default": 4,
    }


def test_value_keywords_forward_to_array_items() -> None:
    schema = Schema(type="array", items=Schema(type="string"))

    outcome = _extract("minItems=1,uniqueItems=true,enum=a,enum=b,minLength=2", schema)

    assert outcome.schema.to_dict() == {
        "items": {"type": "string", "enum": ["a", "b"], "minLength": 2},
        "type": "array",
        "minItems": 1,
        "uniqueItems": True,
    }
    assert schema.items.enum is None


def test_annotation_keywords() -> None:
    outcome = _extract(
        r"title=Name,description=Display name\, shown publicly,example=ann,example=bob,"
        "readOnly,deprecated=true",
        Schema(type="string"),
    )

    assert outcome.schema.title == "Name"
    assert outcome.schema.description == "Display name, shown publicly"
    assert outcome.schema.examples == ["ann", "bob"]
    assert outcome.schema.read_only is True
    assert outcome.schema.deprecated is True


def test_decoder_tokens_are_ignored() -> None:
    outcome = _extract("required,oneof_required=contact", Schema(type="string"))

    assert outcome.diagnostics == ()
    assert outcome.schema.to_dict() == {"type": "string"}


def test_any_schema_loses_boolean_form_when_constrained() -> None:
    outcome = _extract("description=Free-form payload", true_schema())

    assert outcome.schema.to_dict() == {"description": "Free-form payload"}


@pytest.mark.parametrize(
    ("tag", "schema", "reason"),
    [
        ("minimum=abc", Schema(type="integer"), "'abc' is not a number"),
        ("bogus=1", Schema(type="string"), "unknown keyword"),
        ("minLength=3", Schema(type="integer"), "not applicable to integer"),
        ("pattern=[", Schema(type="string"), "invalid pattern"),
        ("maxLength", Schema(type="string"), "missing value"),
        ("minLength=-1", Schema(type="string"), "must not be negative"),
        ("enum=x", Schema(type="boolean"), "'x' is not a boolean"),
        ("minLength=1", Schema.reference("#/$defs/Name"), "untyped schema"),
    ],
)
def test_invalid_tokens_become_diagnostics(tag: str, schema: Schema, reason: str) -> None:
    outcome = _extract(tag, schema)

    assert len(outcome.diagnostics) == 1
    diagnostic = outcome.diagnostics[0]
    assert diagnostic.token == tag
    assert reason in diagnostic.reason
    assert str(diagnostic).startswith(f"User.name: ignored '{tag}'")


def test_valid_tokens_survive_invalid_neighbours() -> None:
    outcome = _extract("minLength=x,maxLength=5", Schema(type="string"))

    assert outcome.schema.max_length == 5
    assert outcome.schema.min_length is None
    assert len(outcome.diagnostics) == 1
    assert outcome.diagnostics[0].token == "minLength=x"


def test_nullable_wraps_simple_type() -> None:
    outcome = _extract("nullable,minLength=1", Schema(type="string"))

    assert outcome.schema.to_dict() == {
        "oneOf": [{"type": "string"}, {"type": "null"}],
        "minLength": 1,
    }


def test_nullable_reference_keeps_reference_intact() -> None:
    outcome = _extract("nullable,description=Home", Schema.reference("#/$defs/Address"))

    assert outcome.schema.to_dict() == {
        "oneOf": [{"$ref": "#/$defs/Address"}, {"type": "null"}],
        "description": "Home",
    }


def test_nullable_extends_any_of() -> None:
    schema = Schema(any_of=[Schema(type="integer"), Schema(type="string")])

    outcome = _extract("nullable", schema)

    assert outcome.schema.to_dict() == {
        "anyOf": [{"type": "integer"}, {"type": "string"}, {"type": "null"}]
    }


def test_nullable_enum_accepts_null() -> None:
    outcome = _extract("nullable", Schema(type="string", enum=["red", "green"]))

    assert outcome.schema.to_dict() == {
        "type": ["string", "null"],
        "enum": ["red", "green", None],
    }


def test_nullable_const_moves_value_into_branch() -> None:
    outcome = _extract("const=admin,nullable", Schema(type="string"))

    assert outcome.schema.to_dict() == {
        "oneOf": [{"type": "string", "const": "admin"}, {"type": "null"}]
    }


def test_type_override_is_skipped_on_reference() -> None:
    outcome = _extract("type=object,description=Home", Schema.reference("#/$defs/Address"))

    assert outcome.schema.to_dict() == {"$ref": "#/$defs/Address", "description": "Home"}
    assert [(item.token, item.reason) for item in outcome.diagnostics] == [
        ("type=object", "not applicable to a reference")
    ]
