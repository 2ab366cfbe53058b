"""Constraint tag to JSON Schema keyword extraction."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from schema_reflector.schema_management.schema_models import Schema

from .constraint_diagnostics import ConstraintDiagnostic
from .tag_tokens import OMIT_MARKER, split_tag_tokens, split_token

JSON_TYPES = frozenset({"object", "array", "string", "number", "integer", "boolean", "null"})
DECODER_KEYS = frozenset({"required", OMIT_MARKER, "oneof_required", "anyof_required"})

_NUMERIC_TYPES = frozenset({"integer", "number"})
_TRUE_VALUES = frozenset({"true", "1", "yes"})
_FALSE_VALUES = frozenset({"false", "0", "no"})


class _SkippedToken(ValueError):
    """Raised internally for a constraint token that cannot be applied."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


@dataclass(frozen=True)
class ConstraintOutcome:
    """Constrained copy of a field schema plus skipped-token diagnostics."""

    schema: Schema
    diagnostics: tuple[ConstraintDiagnostic, ...]


def extract_constraints(
    raw_tag: Any, schema: Schema, *, type_name: str, field_name: str
) -> ConstraintOutcome:
    """Apply every valid token of `raw_tag` to a copy of `schema`.

    Bad tokens are skipped one at a time and reported as diagnostics.
    """
    tokens = split_tag_tokens(raw_tag)
    target = schema.copy()
    if not tokens:
        return ConstraintOutcome(schema=target, diagnostics=())
    if target.boolean is True:
        target.boolean = None

    diagnostics: list[ConstraintDiagnostic] = []
    nullable = False
    for token in tokens:
        key, value = split_token(token)
        if key in DECODER_KEYS:
            continue
        try:
            if key == "nullable":
                nullable = _parse_boolean(value)
            else:
                _apply_token(target, key, value)
        except _SkippedToken as exc:
            diagnostic = ConstraintDiagnostic(
                type_name=type_name, field_name=field_name, token=token, reason=exc.reason
            )
            diagnostics.append(diagnostic)

    if nullable:
        target = _make_nullable(target)
    return ConstraintOutcome(schema=target, diagnostics=tuple(diagnostics))


def _apply_token(schema: Schema, key: str, value: str | None) -> None:
    generic = _GENERIC_KEYWORDS.get(key)
    if generic is not None:
        generic(schema, value)
        return

    typed = _TYPED_KEYWORDS.get(key)
    if typed is None:
        raise _SkippedToken("unknown keyword")
    attribute, accepted_types, forward_to_items, parse = typed
    holder = _keyword_holder(schema, accepted_types, forward_to_items)
    setattr(holder, attribute, parse(_require_value(value)))


def _keyword_holder(schema: Schema, accepted: frozenset[str], forward: bool) -> Schema:
    types = _schema_types(schema)
    items = schema.items
    if forward and "array" in types and items is not None and not items.is_reference:
        if items.boolean is None and _schema_types(items) & accepted:
            schema.items = items.copy()
            return schema.items
    if types & accepted:
        return schema
    label = "/".join(sorted(types)) if types else "untyped schema"
    raise _SkippedToken(f"not applicable to {label}")


def _apply_value_keyword(attribute: str) -> Callable[[Schema, str | None], None]:
    def apply(schema: Schema, value: str | None) -> None:
        holder = _keyword_holder(schema, JSON_TYPES - {"array", "object"}, True)
        coerced = _coerce(_require_value(value), _primary_type(holder))
        if attribute == "enum":
            holder.enum = [*(holder.enum or []), coerced]
        else:
            holder.const = coerced

    return apply


def _apply_example(schema: Schema, value: str | None) -> None:
    schema.examples = [*(schema.examples or []), _coerce_scalar(schema, value)]


def _apply_default(schema: Schema, value: str | None) -> None:
    schema.default = _coerce_scalar(schema, value)


def _apply_type(schema: Schema, value: str | None) -> None:
    json_type = _require_value(value)
    if json_type not in JSON_TYPES:
        raise _SkippedToken(f"unknown JSON type '{json_type}'")
    if schema.is_reference:
        raise _SkippedToken("not applicable to a reference")
    schema.type = json_type


def _set_text(attribute: str) -> Callable[[Schema, str | None], None]:
    def apply(schema: Schema, value: str | None) -> None:
        setattr(schema, attribute, _require_value(value))

    return apply


def _set_flag(attribute: str) -> Callable[[Schema, str | None], None]:
    def apply(schema: Schema, value: str | None) -> None:
        setattr(schema, attribute, _parse_boolean(value))

    return apply


def _coerce_scalar(schema: Schema, value: str | None) -> Any:
    json_type = _primary_type(schema)
    if json_type in ("array", "object"):
        raise _SkippedToken(f"cannot express a {json_type} value in a tag")
    return _coerce(_require_value(value), json_type)


def _coerce(value: str, json_type: str | None) -> Any:
    if json_type == "integer":
        return _parse_integer(value)
    if json_type == "number":
        return _parse_number(value)
    if json_type == "boolean":
        return _parse_boolean(value)
    if json_type == "null":
        if value != "null":
            raise _SkippedToken("expected null")
        return None
    return value


def _parse_integer(value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise _SkippedToken(f"'{value}' is not an integer") from exc


def _parse_non_negative_integer(value: str) -> int:
    parsed = _parse_integer(value)
    if parsed < 0:
        raise _SkippedToken(f"'{value}' must not be negative")
    return parsed


def _parse_number(value: str) -> int | float:
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError as exc:
        raise _SkippedToken(f"'{value}' is not a number") from exc


def _parse_positive_number(value: str) -> int | float:
    parsed = _parse_number(value)
    if parsed <= 0:
        raise _SkippedToken(f"'{value}' must be greater than zero")
    return parsed


def _parse_boolean(value: str | None) -> bool:
    if value is None:
        return True
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise _SkippedToken(f"'{value}' is not a boolean")


def _parse_pattern(value: str) -> str:
    try:
        re.compile(value)
    except re.error as exc:
        raise _SkippedToken(f"invalid pattern: {exc}") from exc
    return value


def _require_value(value: str | None) -> str:
    if value is None or value == "":
        raise _SkippedToken("missing value")
    return value


def _schema_types(schema: Schema) -> frozenset[str]:
    if schema.type is None:
        return frozenset()
    if isinstance(schema.type, str):
        return frozenset({schema.type})
    return frozenset(schema.type)


def _primary_type(schema: Schema) -> str | None:
    if isinstance(schema.type, str):
        return schema.type
    if isinstance(schema.type, list):
        non_null = [value for value in schema.type if value != "null"]
        return non_null[0] if non_null else "null"
    return None


def _make_nullable(schema: Schema) -> Schema:
    null_schema = Schema(type="null")
    if schema.is_reference:
        wrapper = schema.copy()
        wrapper.ref = None
        wrapper.one_of = [Schema.reference(schema.ref or ""), null_schema]
        return wrapper
    if schema.has_const:
        branch = Schema(type=schema.type, const=schema.const)
        schema.clear_const()
        schema.type = None
        schema.one_of = [branch, null_schema]
        return schema
    if schema.enum is not None:
        if None not in schema.enum:
            schema.enum = [*schema.enum, None]
        schema.type = _with_null(schema.type)
        return schema
    if schema.any_of is not None:
        schema.any_of = [*schema.any_of, null_schema]
        return schema
    if isinstance(schema.type, list):
        schema.type = _with_null(schema.type)
        return schema
    if schema.type is not None:
        schema.one_of = [Schema(type=schema.type), null_schema]
        schema.type = None
    return schema


def _with_null(json_type: str | list[str] | None) -> str | list[str] | None:
    if json_type is None:
        return None
    if isinstance(json_type, str):
        return json_type if json_type == "null" else [json_type, "null"]
    return json_type if "null" in json_type else [*json_type, "null"]


_GENERIC_KEYWORDS: dict[str, Callable[[Schema, str | None], None]] = {
    "title": _set_text("title"),
    "description": _set_text("description"),
    "default": _apply_default,
    "example": _apply_example,
    "enum": _apply_value_keyword("enum"),
    "const": _apply_value_keyword("const"),
    "format": _set_text("format"),
    "type": _apply_type,
    "readOnly": _set_flag("read_only"),
    "writeOnly": _set_flag("write_only"),
    "deprecated": _set_flag("deprecated"),
}

_STRING = frozenset({"string"})
_ARRAY = frozenset({"array"})
_OBJECT = frozenset({"object"})

_TYPED_KEYWORDS: dict[str, tuple[str, frozenset[str], bool, Callable[[str], Any]]] = {
    "minLength": ("min_length", _STRING, True, _parse_non_negative_integer),
    "maxLength": ("max_length", _STRING, True, _parse_non_negative_integer),
    "pattern": ("pattern", _STRING, True, _parse_pattern),
    "contentEncoding": ("content_encoding", _STRING, True, str),
    "contentMediaType": ("content_media_type", _STRING, True, str),
    "minimum": ("minimum", _NUMERIC_TYPES, True, _parse_number),
    "maximum": ("maximum", _NUMERIC_TYPES, True, _parse_number),
    "exclusiveMinimum": ("exclusive_minimum", _NUMERIC_TYPES, True, _parse_number),
    "exclusiveMaximum": ("exclusive_maximum", _NUMERIC_TYPES, True, _parse_number),
    "multipleOf": ("multiple_of", _NUMERIC_TYPES, True, _parse_positive_number),
    "minItems": ("min_items", _ARRAY, False, _parse_non_negative_integer),
    "maxItems": ("max_items", _ARRAY, False, _parse_non_negative_integer),
    "uniqueItems": ("unique_items", _ARRAY, False, _parse_boolean),
    "minProperties": ("min_properties", _OBJECT, False, _parse_non_negative_integer),
    "maxProperties": ("max_properties", _OBJECT, False, _parse_non_negative_integer),
}
