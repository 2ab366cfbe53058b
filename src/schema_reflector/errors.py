"""Reflection error taxonomy."""

from __future__ import annotations


class ReflectionError(Exception):
    """Base class for failures that abort a reflection call."""


class UnsupportedTypeError(ReflectionError):
    """Raised for type shapes that cannot be represented as JSON Schema."""

    def __init__(self, annotation: object, reason: str) -> None:
        super().__init__(f"Unsupported type {annotation!r}: {reason}")
        self.annotation = annotation
        self.reason = reason


class AmbiguousNameError(ReflectionError):
    """Raised when two distinct types map to the same definition name."""

    def __init__(self, schema_name: str, first: str, second: str) -> None:
        super().__init__(
            f"Definition name '{schema_name}' is shared by '{first}' and '{second}'."
        )
        self.schema_name = schema_name
        self.qualified_names = (first, second)
