"""Reflect Python dataclasses and TypedDicts into JSON Schema documents."""

import logging

from .comment_extraction import collect_docstring_comments
from .configuration import (
    Option,
    ReflectorConfig,
    new_reflector_config,
    with_additional_fields,
    with_additional_properties_allowed,
    with_anonymous,
    with_assign_anchor,
    with_base_schema_id,
    with_comment_map,
    with_embedded_as_reference,
    with_expanded_struct,
    with_field_name_tag,
    with_ignored_types,
    with_key_namer,
    with_lookup,
    with_mapper,
    with_namer,
    with_required_from_jsonschema_tags,
    without_reference,
)
from .constraints import ConstraintDiagnostic
from .errors import AmbiguousNameError, ReflectionError, UnsupportedTypeError
from .reflection import ReflectionResult, Reflector, new_reflector, reflect
from .schema_management import Schema, SchemaModelError, true_schema
from .type_inspection import RecordField

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AmbiguousNameError",
    "ConstraintDiagnostic",
    "Option",
    "RecordField",
    "ReflectionError",
    "ReflectionResult",
    "Reflector",
    "ReflectorConfig",
    "Schema",
    "SchemaModelError",
    "UnsupportedTypeError",
    "collect_docstring_comments",
    "new_reflector",
    "new_reflector_config",
    "reflect",
    "true_schema",
    "with_additional_fields",
    "with_additional_properties_allowed",
    "with_anonymous",
    "with_assign_anchor",
    "with_base_schema_id",
    "with_comment_map",
    "with_embedded_as_reference",
    "with_expanded_struct",
    "with_field_name_tag",
    "with_ignored_types",
    "with_key_namer",
    "with_lookup",
    "with_mapper",
    "with_namer",
    "with_required_from_jsonschema_tags",
    "without_reference",
]
