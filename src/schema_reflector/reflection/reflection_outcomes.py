"""Reflection result entities."""

from __future__ import annotations

from dataclasses import dataclass

from schema_reflector.constraints.constraint_diagnostics import ConstraintDiagnostic
from schema_reflector.schema_management.schema_models import Schema


@dataclass(frozen=True)
class ReflectionResult:
    """Schema document produced by one reflection call."""

    schema: Schema
    diagnostics: tuple[ConstraintDiagnostic, ...] = ()

    def to_json(self, indent: int | None = 2) -> str:
        return self.schema.to_json(indent=indent)
