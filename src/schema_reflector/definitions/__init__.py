"""Definition registry exports."""

from .definition_registry import (
    BuildState,
    DefinitionRegistry,
    RegistryEntry,
    normalize_schema_name,
)

__all__ = ["BuildState", "DefinitionRegistry", "RegistryEntry", "normalize_schema_name"]
