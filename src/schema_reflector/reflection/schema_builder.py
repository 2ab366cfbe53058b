"""Type graph to JSON Schema reflection engine."""

from __future__ import annotations

import datetime
import decimal
import ipaddress
import logging
import pathlib
import re
import typing
import uuid
from collections.abc import Sequence
from typing import Any, get_origin

from schema_reflector.configuration.reflector_settings import (
    Option,
    ReflectorConfig,
    new_reflector_config,
)
from schema_reflector.definitions.definition_registry import BuildState, DefinitionRegistry
from schema_reflector.errors import UnsupportedTypeError
from schema_reflector.field_decoding.field_decoder import FieldDecoder
from schema_reflector.field_decoding.field_models import DecodedField
from schema_reflector.schema_management.schema_models import (
    SCHEMA_VERSION,
    Schema,
    false_schema,
    join_schema_id,
    true_schema,
)
from schema_reflector.type_inspection import (
    TypeDescriptor,
    TypeKind,
    describe_type,
    primitive_base,
)

from .reflection_outcomes import ReflectionResult
from .type_overrides import EXTEND_SCHEMA_HOOK, build_override_chain, resolve_override

_LOGGER = logging.getLogger("schema_reflector.reflection")

_SNAKE_CASE_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")

_PRIMITIVE_SCHEMAS: dict[type, dict[str, str]] = {
    bool: {"type": "boolean"},
    int: {"type": "integer"},
    float: {"type": "number"},
    decimal.Decimal: {"type": "number"},
    str: {"type": "string"},
    bytes: {"type": "string", "content_encoding": "base64"},
    bytearray: {"type": "string", "content_encoding": "base64"},
    datetime.datetime: {"type": "string", "format": "date-time"},
    datetime.date: {"type": "string", "format": "date"},
    datetime.time: {"type": "string", "format": "time"},
    datetime.timedelta: {"type": "string", "format": "duration"},
    uuid.UUID: {"type": "string", "format": "uuid"},
    ipaddress.IPv4Address: {"type": "string", "format": "ipv4"},
    ipaddress.IPv6Address: {"type": "string", "format": "ipv6"},
    pathlib.PurePath: {"type": "string"},
}


class Reflector:
    """Reflects Python types into JSON Schema documents.

    The configuration is never mutated, so one Reflector may serve concurrent
    calls; every call gets its own definition registry.
    """

    def __init__(self, config: ReflectorConfig | None = None) -> None:
        self.config = config or ReflectorConfig()

    def reflect(self, value: Any) -> ReflectionResult:
        """Reflect a type, or the type of an instance."""
        return _ReflectionCall(self.config).run(_root_annotation(value))


def new_reflector(*options: Option) -> Reflector:
    return Reflector(new_reflector_config(*options))


def reflect(value: Any, config: ReflectorConfig | None = None) -> ReflectionResult:
    """Reflect `value` with `config` (defaults when omitted)."""
    return Reflector(config).reflect(value)


def to_snake_case(name: str) -> str:
    return _SNAKE_CASE_BOUNDARY.sub("_", name).lower()


class _ReflectionCall:
    """State for one top-level reflection; discarded afterwards."""

    def __init__(self, config: ReflectorConfig) -> None:
        self._config = config
        self._registry = DefinitionRegistry()
        self._decoder = FieldDecoder(config, reflect_type=self.reflect_type)
        self._overrides = build_override_chain(config)
        self._root_overrides = build_override_chain(config, include_lookup=False)
        self._anchors: dict[str, str] = {}

    def run(self, root: Any) -> ReflectionResult:
        descriptor = _unwrap_optional(describe_type(root))
        _LOGGER.debug("Reflecting root type %s", descriptor.name)

        document = resolve_override(self._root_overrides, descriptor)
        root_is_definition = False
        if document is None and descriptor.kind is TypeKind.RECORD:
            document = self._reflect_root_record(descriptor)
            root_is_definition = True
        elif document is None:
            document = self._reflect_structure(descriptor).copy()
        if document.boolean is True:
            document.boolean = None

        definitions = self._flush_definitions()
        if root_is_definition and document.ref is None and self._config.assign_anchor:
            root_entry = self._registry.lookup(_require_qualified_name(descriptor))
            if root_entry is not None and not root_entry.referenced:
                document.anchor = descriptor.name
        if definitions:
            document.definitions = {**(document.definitions or {}), **definitions}

        document.version = SCHEMA_VERSION
        schema_id = self._root_id(descriptor)
        if schema_id:
            document.id = schema_id
        return ReflectionResult(schema=document, diagnostics=tuple(self._decoder.diagnostics))

    def reflect_type(self, annotation: Any) -> Schema:
        """Reflect a nested annotation, honoring overrides and references."""
        descriptor = _unwrap_optional(describe_type(annotation))
        override = resolve_override(self._overrides, descriptor)
        if override is not None:
            return override
        return self._reflect_structure(descriptor)

    def _reflect_root_record(self, descriptor: TypeDescriptor) -> Schema:
        qualified_name = _require_qualified_name(descriptor)
        self._register(descriptor)
        definition = self._expand_record(descriptor)
        if self._config.expanded_struct or self._config.do_not_reference:
            return definition.copy()
        return Schema.reference(self._registry.note_reference(qualified_name))

    def _reflect_structure(self, descriptor: TypeDescriptor) -> Schema:
        kind = descriptor.kind
        if kind is TypeKind.ANY:
            return true_schema()
        if kind is TypeKind.NULL:
            return Schema(type="null")
        if kind is TypeKind.PRIMITIVE and descriptor.python_type is not None:
            return Schema(**_PRIMITIVE_SCHEMAS[primitive_base(descriptor.python_type)])
        if kind in (TypeKind.ENUM, TypeKind.LITERAL):
            return self._reflect_enumeration(descriptor)
        if kind is TypeKind.SEQUENCE:
            return self._reflect_sequence(descriptor)
        if kind is TypeKind.MAPPING:
            value_schema = self.reflect_type(descriptor.element) if descriptor.elements else None
            return Schema(type="object", additional_properties=value_schema or true_schema())
        if kind is TypeKind.UNION:
            return Schema(any_of=[self.reflect_type(member) for member in descriptor.elements])
        if kind is TypeKind.RECORD:
            return self._reference_or_expand(descriptor)
        raise UnsupportedTypeError(descriptor.annotation, f"cannot reflect {kind.value} type")

    def _reflect_sequence(self, descriptor: TypeDescriptor) -> Schema:
        if descriptor.fixed_length:
            return Schema(
                type="array",
                prefix_items=[self.reflect_type(element) for element in descriptor.elements],
                items=false_schema(),
                min_items=len(descriptor.elements),
                max_items=len(descriptor.elements),
            )
        schema = Schema(type="array")
        if descriptor.elements:
            schema.items = self.reflect_type(descriptor.element)
        if descriptor.unique_items:
            schema.unique_items = True
        return schema

    def _reflect_enumeration(self, descriptor: TypeDescriptor) -> Schema:
        values = list(descriptor.literal_values)
        schema = Schema(type=_json_type_of(descriptor.annotation, values), enum=values)
        if descriptor.qualified_name is not None:
            description = self._config.comment_map.get(descriptor.qualified_name)
            if description:
                schema.description = description
        return schema

    def _reference_or_expand(self, descriptor: TypeDescriptor) -> Schema:
        qualified_name = _require_qualified_name(descriptor)
        entry = self._registry.lookup(qualified_name)
        if entry is not None:
            if entry.state is BuildState.IN_PROGRESS:
                _LOGGER.debug("Breaking cycle at %s", qualified_name)
                return Schema.reference(self._registry.note_reference(qualified_name))
            if not self._config.do_not_reference:
                return Schema.reference(self._registry.note_reference(qualified_name))
            return self._expand_record(descriptor)

        self._register(descriptor)
        definition = self._expand_record(descriptor)
        if self._config.do_not_reference:
            return definition
        return Schema.reference(self._registry.note_reference(qualified_name))

    def _register(self, descriptor: TypeDescriptor) -> None:
        qualified_name = _require_qualified_name(descriptor)
        schema_name, _ = self._registry.register(qualified_name, self._type_name(descriptor))
        self._anchors[schema_name] = descriptor.name

    def _expand_record(self, descriptor: TypeDescriptor) -> Schema:
        qualified_name = _require_qualified_name(descriptor)
        self._registry.mark_in_progress(qualified_name)
        decoded = self._decoder.decode(descriptor)

        schema = Schema(type="object", properties={})
        _assign_properties(schema, decoded.fields, owner=descriptor.name)
        if decoded.embedded:
            schema.all_of = decoded.embedded
        elif not self._config.allow_additional_properties:
            schema.additional_properties = false_schema()

        description = self._config.comment_map.get(qualified_name)
        if description:
            schema.description = description
        extend = getattr(descriptor.python_type, EXTEND_SCHEMA_HOOK, None)
        if callable(extend):
            extend(schema)

        self._registry.mark_complete(qualified_name, schema)
        return schema

    def _flush_definitions(self) -> dict[str, Schema]:
        # An expanded or inlined root is only kept when a cycle points back at it.
        definitions = self._registry.flush(referenced_only=True)
        if not self._config.assign_anchor:
            return definitions
        anchored = {}
        for schema_name, definition in definitions.items():
            anchored[schema_name] = definition.copy()
            anchored[schema_name].anchor = self._anchors.get(schema_name)
        return anchored

    def _type_name(self, descriptor: TypeDescriptor) -> str:
        if self._config.namer is not None and descriptor.python_type is not None:
            custom_name = self._config.namer(descriptor.python_type)
            if custom_name:
                return custom_name
        return descriptor.name

    def _root_id(self, descriptor: TypeDescriptor) -> str | None:
        if self._config.anonymous:
            return None
        if self._config.lookup is not None:
            looked_up = self._config.lookup(descriptor.annotation)
            if looked_up:
                return looked_up
        if self._config.base_schema_id and descriptor.kind in (TypeKind.RECORD, TypeKind.ENUM):
            return join_schema_id(
                self._config.base_schema_id, to_snake_case(self._type_name(descriptor))
            )
        return None


def _assign_properties(schema: Schema, fields: Sequence[DecodedField], *, owner: str) -> None:
    properties: dict[str, Schema] = {}
    required: list[str] = []
    one_of_groups: dict[str, list[str]] = {}
    any_of_groups: dict[str, list[str]] = {}
    for decoded in fields:
        if decoded.name in properties:
            _LOGGER.warning(
                "Dropping field %s.%s: property name already used by an earlier field",
                owner,
                decoded.name,
            )
            continue
        properties[decoded.name] = decoded.schema
        if decoded.required:
            required.append(decoded.name)
        for group in decoded.one_of_groups:
            one_of_groups.setdefault(group, []).append(decoded.name)
        for group in decoded.any_of_groups:
            any_of_groups.setdefault(group, []).append(decoded.name)

    schema.properties = properties
    if required:
        schema.required = required
    if one_of_groups:
        schema.one_of = [Schema(required=names) for names in one_of_groups.values()]
    if any_of_groups:
        schema.any_of = [Schema(required=names) for names in any_of_groups.values()]


def _unwrap_optional(descriptor: TypeDescriptor) -> TypeDescriptor:
    while descriptor.kind is TypeKind.OPTIONAL:
        descriptor = describe_type(descriptor.element)
    return descriptor


def _require_qualified_name(descriptor: TypeDescriptor) -> str:
    if descriptor.qualified_name is None:
        raise UnsupportedTypeError(descriptor.annotation, "record type without a name")
    return descriptor.qualified_name


def _root_annotation(value: Any) -> Any:
    if (
        value is None
        or value is Any
        or isinstance(value, (type, typing.NewType))
        or get_origin(value) is not None
    ):
        return value
    return type(value)


def _json_type_of(annotation: Any, values: Sequence[Any]) -> str | list[str] | None:
    json_types: list[str] = []
    for value in values:
        if value is None:
            json_type = "null"
        elif isinstance(value, bool):
            json_type = "boolean"
        elif isinstance(value, int):
            json_type = "integer"
        elif isinstance(value, float):
            json_type = "number"
        elif isinstance(value, str):
            json_type = "string"
        else:
            raise UnsupportedTypeError(annotation, f"enum value {value!r} is not a JSON scalar")
        if json_type not in json_types:
            json_types.append(json_type)

    if "integer" in json_types and "number" in json_types:
        json_types.remove("integer")
    if not json_types:
        return None
    return json_types[0] if len(json_types) == 1 else json_types
