"""Reflector configuration entities and composable options."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from schema_reflector.schema_management.schema_models import Schema
from schema_reflector.type_inspection.type_descriptors import RecordField

DEFAULT_FIELD_NAME_TAG = "json"

TypeLookup = Callable[[Any], str | None]
TypeMapper = Callable[[Any], Schema | None]
TypeNamer = Callable[[type], str]
KeyNamer = Callable[[str], str]
AdditionalFieldsProvider = Callable[[type], Sequence[RecordField]]


@dataclass(frozen=True)
class ReflectorConfig:  # pylint: disable=too-many-instance-attributes
    """Read-only settings consumed by one or more reflection calls."""

    base_schema_id: str | None = None
    anonymous: bool = False
    assign_anchor: bool = False
    allow_additional_properties: bool = False
    required_from_jsonschema_tags: bool = False
    do_not_reference: bool = False
    expanded_struct: bool = False
    field_name_tag: str = DEFAULT_FIELD_NAME_TAG
    ignored_types: tuple[Any, ...] = ()
    lookup: TypeLookup | None = None
    mapper: TypeMapper | None = None
    namer: TypeNamer | None = None
    key_namer: KeyNamer | None = None
    additional_fields: AdditionalFieldsProvider | None = None
    comment_map: Mapping[str, str] = field(default_factory=dict)
    embedded_as_reference: bool = False

    def is_ignored(self, annotation: Any) -> bool:
        return any(annotation == ignored for ignored in self.ignored_types)


Option = Callable[[ReflectorConfig], ReflectorConfig]


def new_reflector_config(*options: Option) -> ReflectorConfig:
    """Build a configuration by applying options in order."""
    config = ReflectorConfig()
    for option in options:
        config = option(config)
    return config


def _setting(**changes: Any) -> Option:
    def apply(config: ReflectorConfig) -> ReflectorConfig:
        return replace(config, **changes)

    return apply


def with_base_schema_id(schema_id: str) -> Option:
    """Use `schema_id` as the base of the root `$id`.

    A base of `https://example.com/schemas` with a root type `User` produces
    the ID `https://example.com/schemas/user`.
    """
    return _setting(base_schema_id=schema_id)


def with_anonymous() -> Option:
    """Suppress `$id` generation."""
    return _setting(anonymous=True)


def with_assign_anchor() -> Option:
    """Add the original type name as `$anchor` to every definition and the root."""
    return _setting(assign_anchor=True)


def with_additional_properties_allowed() -> Option:
    """Stop emitting `additionalProperties: false` on record schemas."""
    return _setting(allow_additional_properties=True)


def with_required_from_jsonschema_tags() -> Option:
    """Require only fields tagged `required` instead of every field without `omitempty`."""
    return _setting(required_from_jsonschema_tags=True)


def without_reference() -> Option:
    """Expand every record inline instead of referencing `$defs`."""
    return _setting(do_not_reference=True)


def with_expanded_struct() -> Option:
    """Merge the root record into the top-level document instead of referencing it."""
    return _setting(expanded_struct=True)


def with_field_name_tag(tag: str) -> Option:
    """Read external field names from metadata key `tag` (default `json`)."""
    return _setting(field_name_tag=tag)


def with_ignored_types(*ignored: Any) -> Option:
    """Render the given types, or the types of the given instances, as open objects."""
    return _setting(ignored_types=tuple(_as_type(item) for item in ignored))


def with_lookup(lookup: TypeLookup) -> Option:
    """Reference types by the external ID `lookup` returns instead of expanding them."""
    return _setting(lookup=lookup)


def with_mapper(mapper: TypeMapper) -> Option:
    """Use the schema `mapper` returns for a type verbatim."""
    return _setting(mapper=mapper)


def with_namer(namer: TypeNamer) -> Option:
    return _setting(namer=namer)


def with_key_namer(key_namer: KeyNamer) -> Option:
    """Rename keys; receives the tag-resolved name, not the attribute name."""
    return _setting(key_namer=key_namer)


def with_additional_fields(provider: AdditionalFieldsProvider) -> Option:
    return _setting(additional_fields=provider)


def with_comment_map(comment_map: Mapping[str, str]) -> Option:
    """Describe types and fields keyed `<module>.<Type>` and `<module>.<Type>.<attribute>`.

    Entries are only used when no tag supplies a description.
    """
    return _setting(comment_map=dict(comment_map))


def with_embedded_as_reference() -> Option:
    """Reference embedded records through `allOf` instead of splicing their fields."""
    return _setting(embedded_as_reference=True)


def _as_type(item: Any) -> Any:
    if dataclasses.is_dataclass(item) and not isinstance(item, type):
        return type(item)
    return item
