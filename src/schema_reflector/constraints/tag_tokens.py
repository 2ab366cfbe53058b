"""Field tag tokenization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

OMIT_MARKER = "-"


@dataclass(frozen=True)
class NameTag:
    """Parsed serialization tag such as `"user_id,omitempty"`."""

    name: str | None
    omit: bool = False
    omit_empty: bool = False
    inline: bool = False


def parse_name_tag(raw: Any) -> NameTag:
    """Parse a field-name tag; `-` alone omits the field."""
    if raw is None:
        return NameTag(name=None)
    text = str(raw).strip()
    if text == OMIT_MARKER:
        return NameTag(name=None, omit=True)
    name, *options = [part.strip() for part in text.split(",")]
    return NameTag(
        name=name or None,
        omit_empty="omitempty" in options,
        inline="inline" in options,
    )


def split_tag_tokens(raw: Any) -> list[str]:
    """Split a constraint tag on commas; `\\,` keeps a literal comma."""
    if raw is None:
        return []
    tokens: list[str] = []
    current: list[str] = []
    escaped = False
    for character in str(raw):
        if escaped:
            if character != ",":
                current.append("\\")
            current.append(character)
            escaped = False
        elif character == "\\":
            escaped = True
        elif character == ",":
            tokens.append("".join(current))
            current = []
        else:
            current.append(character)
    if escaped:
        current.append("\\")
    tokens.append("".join(current))
    return [token.strip() for token in tokens if token.strip()]


def split_token(token: str) -> tuple[str, str | None]:
    """Return `(key, value)`; value is None for bare flags."""
    key, separator, value = token.partition("=")
    return key.strip(), value.strip() if separator else None


def parse_extras(raw: Any) -> dict[str, Any]:
    """Parse `key=value` pairs; a repeated key collects its values into a list."""
    extras: dict[str, Any] = {}
    for token in split_tag_tokens(raw):
        key, value = split_token(token)
        if not key or value is None:
            continue
        if key not in extras:
            extras[key] = value
        elif isinstance(extras[key], list):
            extras[key].append(value)
        else:
            extras[key] = [extras[key], value]
    return extras
