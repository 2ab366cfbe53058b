"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "schema-reflector.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Reflector configuration template for schema-reflector.
# Every option is optional; delete the lines you do not need.
# Callables and types are given as "package.module:name" import paths.

# Base URI joined with the snake_case root type name to form the root $id.
base_schema_id: "https://example.com/schemas"
# Set to true to omit $id entirely.
anonymous: false
# Add the original type name as $anchor to every definition and the root.
assign_anchor: false
# Leave additionalProperties open instead of emitting false on record schemas.
allow_additional_properties: false
# Require only fields tagged "required" in their jsonschema metadata.
required_from_jsonschema_tags: false
# Expand every record inline; only cycles are kept under $defs.
without_reference: false
# Merge the root record into the top-level document instead of using $ref.
expanded_struct: false
# Reference embedded (",inline") records through allOf instead of splicing fields.
embedded_as_reference: false
# Metadata key that supplies external field names.
field_name_tag: "json"

# ignored_types:
#   - "<OPTIONAL package.module:Type>"
# lookup: "<OPTIONAL package.module:function>"
# mapper: "<OPTIONAL package.module:function>"
# namer: "<OPTIONAL package.module:function>"
# key_namer: "<OPTIONAL package.module:function>"
# additional_fields: "<OPTIONAL package.module:function>"
# comment_map:
#   "package.module.Type": "Type description"
#   "package.module.Type.attribute": "Field description"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML reflector configuration template with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder reflector configuration to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
