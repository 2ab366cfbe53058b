"""Type inspection exports."""

from .type_descriptors import RecordField, TypeDescriptor, TypeKind
from .type_introspection import (
    describe_type,
    is_record_type,
    primitive_base,
    qualified_name_of,
    record_fields,
)

__all__ = [
    "RecordField",
    "TypeDescriptor",
    "TypeKind",
    "describe_type",
    "is_record_type",
    "primitive_base",
    "qualified_name_of",
    "record_fields",
]
