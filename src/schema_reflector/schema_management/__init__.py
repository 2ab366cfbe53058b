"""Schema model exports."""

from .schema_models import (
    SCHEMA_VERSION,
    Schema,
    SchemaModelError,
    definition_uri,
    false_schema,
    join_schema_id,
    true_schema,
)

__all__ = [
    "SCHEMA_VERSION",
    "Schema",
    "SchemaModelError",
    "definition_uri",
    "false_schema",
    "join_schema_id",
    "true_schema",
]
