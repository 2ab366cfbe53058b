"""Constraint extraction exports."""

from .constraint_diagnostics import ConstraintDiagnostic
from .constraint_extractor import ConstraintOutcome, extract_constraints
from .tag_tokens import NameTag, parse_extras, parse_name_tag, split_tag_tokens

__all__ = [
    "ConstraintDiagnostic",
    "ConstraintOutcome",
    "NameTag",
    "extract_constraints",
    "parse_extras",
    "parse_name_tag",
    "split_tag_tokens",
]
