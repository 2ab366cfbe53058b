"""Type descriptor entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TypeKind(str, Enum):
    """Normalized shape of a reflected type."""

    PRIMITIVE = "primitive"
    RECORD = "record"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    OPTIONAL = "optional"
    UNION = "union"
    ENUM = "enum"
    LITERAL = "literal"
    ANY = "any"
    NULL = "null"


@dataclass(frozen=True)
class TypeDescriptor:  # pylint: disable=too-many-instance-attributes
    """Language-neutral view of one annotation.

    Element annotations are kept unresolved so that self-referential types are
    only described when the walk actually reaches them.
    """

    kind: TypeKind
    annotation: Any
    python_type: type | None = None
    qualified_name: str | None = None
    elements: tuple[Any, ...] = ()
    unique_items: bool = False
    fixed_length: bool = False
    literal_values: tuple[Any, ...] = ()

    @property
    def name(self) -> str:
        if self.python_type is not None:
            return self.python_type.__name__
        return repr(self.annotation)

    @property
    def element(self) -> Any:
        return self.elements[0] if self.elements else Any


@dataclass(frozen=True)
class RecordField:
    """One declared field of a record type, before decoding."""

    attribute: str
    annotation: Any
    metadata: Mapping[str, Any] = field(default_factory=dict)
    declared_required: bool | None = None
