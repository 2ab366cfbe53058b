"""Ordered per-type override strategies consulted before structural reflection."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from schema_reflector.configuration.reflector_settings import (
    ReflectorConfig,
    TypeLookup,
    TypeMapper,
)
from schema_reflector.schema_management.schema_models import Schema, true_schema
from schema_reflector.type_inspection import TypeDescriptor

CUSTOM_SCHEMA_HOOK = "__json_schema__"
EXTEND_SCHEMA_HOOK = "__json_schema_extend__"


class TypeOverride(Protocol):
    """Returns a replacement schema for a type, or None when it does not apply."""

    def resolve(self, descriptor: TypeDescriptor) -> Schema | None: ...


@dataclass(frozen=True)
class LookupOverride:
    """Reference types that are defined in an external schema document."""

    lookup: TypeLookup

    def resolve(self, descriptor: TypeDescriptor) -> Schema | None:
        schema_id = self.lookup(descriptor.annotation)
        return Schema.reference(schema_id) if schema_id else None


@dataclass(frozen=True)
class MapperOverride:
    """Use a caller-supplied schema verbatim."""

    mapper: TypeMapper

    def resolve(self, descriptor: TypeDescriptor) -> Schema | None:
        return _usable(self.mapper(descriptor.annotation))


@dataclass(frozen=True)
class IgnoredTypeOverride:
    """Render ignored types as open placeholders."""

    config: ReflectorConfig

    def resolve(self, descriptor: TypeDescriptor) -> Schema | None:
        if self.config.is_ignored(descriptor.annotation):
            return Schema(additional_properties=true_schema())
        return None


@dataclass(frozen=True)
class CustomSchemaOverride:
    """Use the schema a type declares for itself through `__json_schema__`."""

    def resolve(self, descriptor: TypeDescriptor) -> Schema | None:
        hook = getattr(descriptor.python_type, CUSTOM_SCHEMA_HOOK, None)
        if not callable(hook):
            return None
        return _usable(hook())


def build_override_chain(
    config: ReflectorConfig, *, include_lookup: bool = True
) -> tuple[TypeOverride, ...]:
    """Return the strategies in precedence order: lookup, mapper, ignored, custom."""
    chain: list[TypeOverride] = []
    if include_lookup and config.lookup is not None:
        chain.append(LookupOverride(config.lookup))
    if config.mapper is not None:
        chain.append(MapperOverride(config.mapper))
    if config.ignored_types:
        chain.append(IgnoredTypeOverride(config))
    chain.append(CustomSchemaOverride())
    return tuple(chain)


def resolve_override(
    chain: Sequence[TypeOverride], descriptor: TypeDescriptor
) -> Schema | None:
    """Return the first matching strategy's schema."""
    for strategy in chain:
        schema = strategy.resolve(descriptor)
        if schema is not None:
            return schema
    return None


def _usable(schema: Schema | None) -> Schema | None:
    if schema is None or schema.is_empty():
        return None
    return schema.copy()
