"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import (
    ConfigurationError,
    load_reflector_config,
    parse_reflector_config,
    resolve_import_path,
)
from .reflector_settings import (
    DEFAULT_FIELD_NAME_TAG,
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

__all__ = [
    "DEFAULT_CONFIG_FILENAME",
    "DEFAULT_FIELD_NAME_TAG",
    "ConfigurationError",
    "Option",
    "ReflectorConfig",
    "build_placeholder_configuration",
    "load_reflector_config",
    "new_reflector_config",
    "parse_reflector_config",
    "resolve_import_path",
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
    "write_placeholder_configuration",
]
