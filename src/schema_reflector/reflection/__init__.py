"""Reflection engine exports."""

from .reflection_outcomes import ReflectionResult
from .schema_builder import Reflector, new_reflector, reflect, to_snake_case
from .type_overrides import (
    CUSTOM_SCHEMA_HOOK,
    EXTEND_SCHEMA_HOOK,
    TypeOverride,
    build_override_chain,
    resolve_override,
)

__all__ = [
    "CUSTOM_SCHEMA_HOOK",
    "EXTEND_SCHEMA_HOOK",
    "ReflectionResult",
    "Reflector",
    "TypeOverride",
    "build_override_chain",
    "new_reflector",
    "reflect",
    "resolve_override",
    "to_snake_case",
]
