"""Record field decoding service."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from schema_reflector.configuration.reflector_settings import ReflectorConfig
from schema_reflector.constraints.constraint_diagnostics import ConstraintDiagnostic
from schema_reflector.constraints.constraint_extractor import extract_constraints
from schema_reflector.constraints.tag_tokens import (
    OMIT_MARKER,
    parse_extras,
    parse_name_tag,
    split_tag_tokens,
    split_token,
)
from schema_reflector.errors import UnsupportedTypeError
from schema_reflector.schema_management.schema_models import Schema
from schema_reflector.type_inspection import (
    RecordField,
    TypeDescriptor,
    TypeKind,
    describe_type,
    record_fields,
)

from .field_models import DecodedField, DecodedRecord, FieldDescriptor

SCHEMA_TAG = "jsonschema"
EXTRAS_TAG = "jsonschema_extras"
DESCRIPTION_TAG = "jsonschema_description"

_LOGGER = logging.getLogger("schema_reflector.field_decoding")

TypeReflector = Callable[[Any], Schema]


class FieldDecoder:
    """Turns record fields into named property schemas.

    Field types are reflected through the `reflect_type` callback so that the
    caller keeps control of references and cycle handling.
    """

    def __init__(self, config: ReflectorConfig, reflect_type: TypeReflector) -> None:
        self._config = config
        self._reflect_type = reflect_type
        self.diagnostics: list[ConstraintDiagnostic] = []

    def decode(self, owner: TypeDescriptor) -> DecodedRecord:
        """Decode the fields of `owner` in declaration order."""
        return self._decode(owner, embedding_chain=())

    def describe_fields(self, owner: TypeDescriptor) -> list[FieldDescriptor]:
        """Return visible field descriptors, including injected fields."""
        raw_fields = list(record_fields(owner))
        if self._config.additional_fields is not None and owner.python_type is not None:
            raw_fields.extend(self._config.additional_fields(owner.python_type))
        descriptors = (self._describe_field(owner, raw_field) for raw_field in raw_fields)
        return [descriptor for descriptor in descriptors if descriptor is not None]

    def _decode(self, owner: TypeDescriptor, *, embedding_chain: tuple[str, ...]) -> DecodedRecord:
        descriptors = self.describe_fields(owner)
        direct_names = {descriptor.name for descriptor in descriptors if not descriptor.embedded}
        chain = (*embedding_chain, owner.qualified_name or owner.name)
        record = DecodedRecord()
        for descriptor in descriptors:
            if descriptor.embedded:
                self._splice_embedded(descriptor, record, direct_names, chain)
            else:
                record.fields.append(self._decode_field(owner, descriptor))
        return record

    def _describe_field(
        self, owner: TypeDescriptor, raw_field: RecordField
    ) -> FieldDescriptor | None:
        metadata = raw_field.metadata
        name_tag = parse_name_tag(metadata.get(self._config.field_name_tag))
        schema_tag = metadata.get(SCHEMA_TAG)
        tokens = split_tag_tokens(schema_tag)
        if name_tag.omit or OMIT_MARKER in tokens:
            return None

        name = name_tag.name or raw_field.attribute
        if self._config.key_namer is not None:
            name = self._config.key_namer(name)

        description = metadata.get(DESCRIPTION_TAG)
        if description is None and owner.qualified_name is not None:
            description = self._config.comment_map.get(
                f"{owner.qualified_name}.{raw_field.attribute}"
            )

        return FieldDescriptor(
            attribute=raw_field.attribute,
            name=name,
            annotation=raw_field.annotation,
            required=self._is_required(raw_field, name_tag.omit_empty, tokens),
            embedded=name_tag.inline,
            constraint_tag=schema_tag,
            extras_tag=metadata.get(EXTRAS_TAG),
            description=description,
            one_of_groups=_group_names(tokens, "oneof_required"),
            any_of_groups=_group_names(tokens, "anyof_required"),
        )

    def _is_required(self, raw_field: RecordField, omit_empty: bool, tokens: Sequence[str]) -> bool:
        if raw_field.declared_required is not None:
            return raw_field.declared_required
        if self._config.required_from_jsonschema_tags:
            return "required" in tokens
        return not omit_empty

    def _decode_field(self, owner: TypeDescriptor, descriptor: FieldDescriptor) -> DecodedField:
        outcome = extract_constraints(
            descriptor.constraint_tag,
            self._reflect_type(descriptor.annotation),
            type_name=owner.name,
            field_name=descriptor.name,
        )
        self._report(outcome.diagnostics)
        schema = outcome.schema

        extras = parse_extras(descriptor.extras_tag)
        annotated = bool(extras) or (descriptor.description and schema.description is None)
        if annotated and schema.boolean is True:
            schema.boolean = None
        schema.extras.update(extras)
        if schema.description is None and descriptor.description:
            schema.description = descriptor.description

        return DecodedField(
            name=descriptor.name,
            schema=schema,
            required=descriptor.required,
            one_of_groups=descriptor.one_of_groups,
            any_of_groups=descriptor.any_of_groups,
        )

    def _report(self, diagnostics: Sequence[ConstraintDiagnostic]) -> None:
        # Records expanded inline more than once yield the same diagnostics again.
        for diagnostic in diagnostics:
            if diagnostic in self.diagnostics:
                continue
            _LOGGER.warning("Ignoring constraint token: %s", diagnostic)
            self.diagnostics.append(diagnostic)

    def _splice_embedded(
        self,
        descriptor: FieldDescriptor,
        record: DecodedRecord,
        direct_names: set[str],
        chain: tuple[str, ...],
    ) -> None:
        embedded = describe_type(descriptor.annotation)
        while embedded.kind is TypeKind.OPTIONAL:
            embedded = describe_type(embedded.element)
        if embedded.kind is not TypeKind.RECORD:
            raise UnsupportedTypeError(descriptor.annotation, "only records can be embedded")

        if self._config.embedded_as_reference:
            record.embedded.append(self._reflect_type(embedded.annotation))
            return
        if embedded.qualified_name in chain:
            raise UnsupportedTypeError(embedded.annotation, "record embeds itself")

        nested = self._decode(embedded, embedding_chain=chain)
        record.fields.extend(field for field in nested.fields if field.name not in direct_names)
        record.embedded.extend(nested.embedded)


def _group_names(tokens: Sequence[str], key: str) -> tuple[str, ...]:
    names = []
    for token in tokens:
        token_key, value = split_token(token)
        if token_key == key and value:
            names.append(value)
    return tuple(names)
