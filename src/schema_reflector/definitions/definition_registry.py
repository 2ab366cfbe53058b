"""Definition registry for deduplicating and cycle-breaking record schemas."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

from schema_reflector.errors import AmbiguousNameError
from schema_reflector.schema_management.schema_models import Schema, definition_uri

_LOGGER = logging.getLogger("schema_reflector.definitions")

_UNSAFE_NAME_CHARACTERS = re.compile(r"[^A-Za-z0-9_.\-]")


class BuildState(str, Enum):
    """Progress of one definition during a reflection call."""

    UNVISITED = "unvisited"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


@dataclass
class RegistryEntry:
    """Bookkeeping for one record type."""

    qualified_name: str
    schema_name: str
    state: BuildState = BuildState.UNVISITED
    schema: Schema | None = None
    referenced: bool = False

    @property
    def uri(self) -> str:
        return definition_uri(self.schema_name)


def normalize_schema_name(type_name: str) -> str:
    """Make a type name safe to use as a `$defs` key inside a URI fragment."""
    return _UNSAFE_NAME_CHARACTERS.sub("_", type_name.strip())


class DefinitionRegistry:
    """Call-scoped registry of named record schemas.

    Not safe to share across concurrent reflection calls.
    """

    def __init__(self) -> None:
        self._entries: dict[str, RegistryEntry] = {}
        self._owners: dict[str, str] = {}

    def register(self, qualified_name: str, type_name: str) -> tuple[str, bool]:
        """Return the schema name for a type and whether it was already registered."""
        existing = self._entries.get(qualified_name)
        if existing is not None:
            return existing.schema_name, True

        schema_name = normalize_schema_name(type_name)
        owner = self._owners.get(schema_name)
        if owner is not None:
            raise AmbiguousNameError(schema_name, owner, qualified_name)

        self._owners[schema_name] = qualified_name
        self._entries[qualified_name] = RegistryEntry(
            qualified_name=qualified_name, schema_name=schema_name
        )
        _LOGGER.debug("Registered %s as definition %s", qualified_name, schema_name)
        return schema_name, False

    def mark_in_progress(self, qualified_name: str) -> None:
        self._require(qualified_name).state = BuildState.IN_PROGRESS

    def mark_complete(self, qualified_name: str, schema: Schema) -> None:
        entry = self._require(qualified_name)
        entry.state = BuildState.COMPLETE
        entry.schema = schema

    def note_reference(self, qualified_name: str) -> str:
        """Record that a `$ref` to the type was emitted and return its URI."""
        entry = self._require(qualified_name)
        entry.referenced = True
        return entry.uri

    def lookup(self, qualified_name: str) -> RegistryEntry | None:
        return self._entries.get(qualified_name)

    def flush(self, *, referenced_only: bool = False) -> dict[str, Schema]:
        """Return completed definitions keyed by schema name in sorted order."""
        flushed: dict[str, Schema] = {}
        for entry in sorted(self._entries.values(), key=lambda item: item.schema_name):
            if entry.state is not BuildState.COMPLETE or entry.schema is None:
                continue
            if referenced_only and not entry.referenced:
                continue
            flushed[entry.schema_name] = entry.schema
        return flushed

    def _require(self, qualified_name: str) -> RegistryEntry:
        entry = self._entries.get(qualified_name)
        if entry is None:
            raise KeyError(f"Type '{qualified_name}' is not registered.")
        return entry
