"""Constraint diagnostics entities."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ConstraintDiagnostic:
    """One constraint token that was skipped while decoding a field."""

    type_name: str
    field_name: str
    token: str
    reason: str

    def __str__(self) -> str:
        return f"{self.type_name}.{self.field_name}: ignored '{self.token}' ({self.reason})"
