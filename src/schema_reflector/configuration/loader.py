"""Reflector configuration file loader."""

from __future__ import annotations

import importlib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .reflector_settings import DEFAULT_FIELD_NAME_TAG, ReflectorConfig

_BOOLEAN_OPTIONS = {
    "anonymous": "anonymous",
    "assign_anchor": "assign_anchor",
    "allow_additional_properties": "allow_additional_properties",
    "required_from_jsonschema_tags": "required_from_jsonschema_tags",
    "without_reference": "do_not_reference",
    "expanded_struct": "expanded_struct",
    "embedded_as_reference": "embedded_as_reference",
}
_CALLABLE_OPTIONS = ("lookup", "mapper", "namer", "key_namer", "additional_fields")
_KNOWN_OPTIONS = frozenset(
    {*_BOOLEAN_OPTIONS, *_CALLABLE_OPTIONS, "base_schema_id", "field_name_tag"}
    | {"ignored_types", "comment_map"}
)


class ConfigurationError(Exception):
    """Raised when the reflector configuration file is invalid."""


def load_reflector_config(config_path: Path | str) -> ReflectorConfig:
    """Load and validate a YAML (or JSON) reflector configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}
    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")
    return parse_reflector_config(parsed)


def parse_reflector_config(section: Mapping[str, Any]) -> ReflectorConfig:
    """Validate an already-parsed configuration mapping."""
    unknown = sorted(str(key) for key in section if key not in _KNOWN_OPTIONS)
    if unknown:
        raise ConfigurationError(f"Unknown configuration options: {', '.join(unknown)}")

    settings: dict[str, Any] = {
        attribute: _require_bool(section.get(option, False), option)
        for option, attribute in _BOOLEAN_OPTIONS.items()
    }
    settings["base_schema_id"] = _optional_string(section.get("base_schema_id"), "base_schema_id")
    settings["field_name_tag"] = _require_non_empty_string(
        section.get("field_name_tag", DEFAULT_FIELD_NAME_TAG), "field_name_tag"
    )
    settings["ignored_types"] = tuple(
        resolve_import_path(item, "ignored_types")
        for item in _string_sequence(section.get("ignored_types"), "ignored_types")
    )
    for option in _CALLABLE_OPTIONS:
        settings[option] = _optional_callable(section.get(option), option)
    settings["comment_map"] = _string_mapping(section.get("comment_map"), "comment_map")
    return ReflectorConfig(**settings)


def _optional_callable(value: Any, field_name: str) -> Any:
    import_path = _optional_string(value, field_name)
    if import_path is None:
        return None
    resolved = resolve_import_path(import_path, field_name)
    if not callable(resolved):
        raise ConfigurationError(f"{field_name} '{import_path}' is not callable.")
    return resolved


def resolve_import_path(import_path: str, field_name: str) -> Any:
    """Import `package.module:attribute[.nested]` and return the attribute."""
    module_name, separator, attribute_path = import_path.partition(":")
    if not separator or not module_name or not attribute_path:
        raise ConfigurationError(
            f"{field_name} entries must look like 'package.module:name', got '{import_path}'."
        )
    try:
        resolved: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(f"{field_name}: cannot import module '{module_name}'.") from exc
    for attribute in attribute_path.split("."):
        try:
            resolved = getattr(resolved, attribute)
        except AttributeError as exc:
            raise ConfigurationError(
                f"{field_name}: '{module_name}' has no attribute '{attribute_path}'."
            ) from exc
    return resolved


def _string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ConfigurationError(f"{field_name} must be a list of strings.")
    return tuple(_require_non_empty_string(item, field_name) for item in value)


def _string_mapping(value: Any, field_name: str) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"{field_name} must be a mapping.")
    normalized: dict[str, str] = {}
    for key, text in value.items():
        if not isinstance(key, str) or not isinstance(text, str):
            raise ConfigurationError(f"{field_name} keys and values must be strings.")
        normalized[key] = text
    return normalized


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None
