"""Lookup engine: resolve consumer key values against a working copy.

Purely in-memory. A key that is not cached resolves to None (the missing
sentinel); an unpopulated namespace resolves every key to None.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from refcache.application.services.definition_registry import DefinitionRegistry
from refcache.application.services.working_copy import WorkingCopy
from refcache.shared.utils.serialization import entity_key

MISSING = None


def normalize_keys(value: Any) -> list[Any]:
    """Normalize a source property value to a list of keys.

    None -> [], scalar (including str/bytes/mappings) -> [value],
    any other iterable -> list(value) in its own order.
    """
    if value is None:
        return []
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        return [value]
    return list(value)


class LookupEngine:
    """Resolves keys for a definition against the owner's working copy."""

    def __init__(self, registry: DefinitionRegistry, working_copy: WorkingCopy) -> None:
        self.registry = registry
        self.working_copy = working_copy

    def get_cached_entities(self, definition_name: str, value: Any) -> list[Any]:
        """Return one row (or None) per key in value, in input order.

        Duplicates are preserved. Raises UnknownDefinitionException for an
        unregistered name; never raises on a miss.
        """
        definition = self.registry.get(definition_name)
        entities = self.working_copy.entities(definition.require_namespace())
        return [entities.get(entity_key(key), MISSING) for key in normalize_keys(value)]
