"""Field decoding entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from schema_reflector.schema_management.schema_models import Schema


@dataclass(frozen=True)
class FieldDescriptor:  # pylint: disable=too-many-instance-attributes
    """Per-field view after name mapping and tag parsing."""

    attribute: str
    name: str
    annotation: Any
    required: bool
    embedded: bool
    constraint_tag: Any = None
    extras_tag: Any = None
    description: str | None = None
    one_of_groups: tuple[str, ...] = ()
    any_of_groups: tuple[str, ...] = ()


@dataclass(frozen=True)
class DecodedField:
    """One property ready to be placed in a record schema."""

    name: str
    schema: Schema
    required: bool
    one_of_groups: tuple[str, ...] = ()
    any_of_groups: tuple[str, ...] = ()


@dataclass
class DecodedRecord:
    """Decoded properties of one record plus embedded records kept by reference."""

    fields: list[DecodedField] = field(default_factory=list)
    embedded: list[Schema] = field(default_factory=list)
