"""JSON Schema value model."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from typing import Any

SCHEMA_VERSION = "https://json-schema.org/draft/2020-12/schema"
DEFINITIONS_PREFIX = "#/$defs/"

# Attribute name -> JSON keyword, in serialization order.
_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("version", "$schema"),
    ("id", "$id"),
    ("anchor", "$anchor"),
    ("ref", "$ref"),
    ("definitions", "$defs"),
    ("comment", "$comment"),
    ("all_of", "allOf"),
    ("any_of", "anyOf"),
    ("one_of", "oneOf"),
    ("prefix_items", "prefixItems"),
    ("items", "items"),
    ("properties", "properties"),
    ("additional_properties", "additionalProperties"),
    ("type", "type"),
    ("enum", "enum"),
    ("const", "const"),
    ("multiple_of", "multipleOf"),
    ("maximum", "maximum"),
    ("exclusive_maximum", "exclusiveMaximum"),
    ("minimum", "minimum"),
    ("exclusive_minimum", "exclusiveMinimum"),
    ("max_length", "maxLength"),
    ("min_length", "minLength"),
    ("pattern", "pattern"),
    ("max_items", "maxItems"),
    ("min_items", "minItems"),
    ("unique_items", "uniqueItems"),
    ("max_properties", "maxProperties"),
    ("min_properties", "minProperties"),
    ("required", "required"),
    ("format", "format"),
    ("content_encoding", "contentEncoding"),
    ("content_media_type", "contentMediaType"),
    ("title", "title"),
    ("description", "description"),
    ("default", "default"),
    ("deprecated", "deprecated"),
    ("read_only", "readOnly"),
    ("write_only", "writeOnly"),
    ("examples", "examples"),
)

_STRUCTURAL_ATTRIBUTES = frozenset(
    {
        "type",
        "properties",
        "required",
        "items",
        "prefix_items",
        "additional_properties",
        "definitions",
        "all_of",
        "any_of",
        "one_of",
    }
)

_UNSET = object()


class SchemaModelError(ValueError):
    """Raised when a Schema value breaks the reference/definition invariant."""


@dataclass(eq=False)
class Schema:  # pylint: disable=too-many-instance-attributes
    """One JSON Schema document or fragment.

    `boolean` turns the schema into the literal `true`/`false` schema and
    overrides every other attribute. `default` and `const` use a sentinel so
    that `None` can be emitted as a JSON `null`.
    """

    version: str | None = None
    id: str | None = None
    anchor: str | None = None
    ref: str | None = None
    definitions: dict[str, Schema] | None = None
    comment: str | None = None
    all_of: list[Schema] | None = None
    any_of: list[Schema] | None = None
    one_of: list[Schema] | None = None
    prefix_items: list[Schema] | None = None
    items: Schema | None = None
    properties: dict[str, Schema] | None = None
    additional_properties: Schema | None = None
    type: str | list[str] | None = None
    enum: list[Any] | None = None
    const: Any = _UNSET
    multiple_of: float | None = None
    maximum: float | None = None
    exclusive_maximum: float | None = None
    minimum: float | None = None
    exclusive_minimum: float | None = None
    max_length: int | None = None
    min_length: int | None = None
    pattern: str | None = None
    max_items: int | None = None
    min_items: int | None = None
    unique_items: bool | None = None
    max_properties: int | None = None
    min_properties: int | None = None
    required: list[str] | None = None
    format: str | None = None
    content_encoding: str | None = None
    content_media_type: str | None = None
    title: str | None = None
    description: str | None = None
    default: Any = _UNSET
    deprecated: bool | None = None
    read_only: bool | None = None
    write_only: bool | None = None
    examples: list[Any] | None = None
    extras: dict[str, Any] = field(default_factory=dict)
    boolean: bool | None = None

    @classmethod
    def reference(cls, uri: str) -> Schema:
        return cls(ref=uri)

    @property
    def is_reference(self) -> bool:
        return self.ref is not None

    @property
    def has_const(self) -> bool:
        return self.const is not _UNSET

    @property
    def has_default(self) -> bool:
        return self.default is not _UNSET

    def clear_const(self) -> None:
        self.const = _UNSET

    def is_empty(self) -> bool:
        """Return True when the schema carries no keyword at all."""
        if self.boolean is not None or self.extras:
            return False
        return all(
            _is_unset(attribute, getattr(self, attribute)) for attribute, _ in _KEYWORDS
        )

    def copy(self) -> Schema:
        """Return a shallow copy with independent top-level containers."""
        duplicate = Schema()
        for schema_field in fields(self):
            value = getattr(self, schema_field.name)
            if isinstance(value, dict):
                value = dict(value)
            elif isinstance(value, list):
                value = list(value)
            setattr(duplicate, schema_field.name, value)
        return duplicate

    def to_dict(self) -> dict[str, Any] | bool:
        """Serialize to the JSON Schema wire representation."""
        if self.boolean is not None:
            return self.boolean
        if self.is_reference:
            clashing = sorted(
                attribute
                for attribute in _STRUCTURAL_ATTRIBUTES - {"definitions"}
                if not _is_unset(attribute, getattr(self, attribute))
            )
            if clashing:
                raise SchemaModelError(
                    f"Reference schema '{self.ref}' must not define: {', '.join(clashing)}"
                )

        document: dict[str, Any] = {}
        for attribute, keyword in _KEYWORDS:
            value = getattr(self, attribute)
            if _is_unset(attribute, value):
                continue
            document[keyword] = _serialize_value(value)
        for key, value in self.extras.items():
            document.setdefault(key, _serialize_value(value))
        return document

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


def true_schema() -> Schema:
    """Schema accepting any value."""
    return Schema(boolean=True)


def false_schema() -> Schema:
    """Schema rejecting every value."""
    return Schema(boolean=False)


def definition_uri(schema_name: str) -> str:
    return f"{DEFINITIONS_PREFIX}{schema_name}"


def join_schema_id(base_id: str, name: str) -> str:
    """Join a base schema ID and a path segment with exactly one slash."""
    return f"{base_id.rstrip('/')}/{name.lstrip('/')}"


def _is_unset(attribute: str, value: Any) -> bool:
    if attribute in ("const", "default"):
        return value is _UNSET
    return value is None


def _serialize_value(value: Any) -> Any:
    if isinstance(value, Schema):
        return value.to_dict()
    if isinstance(value, dict):
        return {key: _serialize_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_serialize_value(item) for item in value]
    return value
