"""Definition registry: named reference definitions in registration order."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Mapping
from typing import Any

from refcache.domain.exceptions import UnknownDefinitionException
from refcache.domain.value_objects.definition import Definition


class DefinitionRegistry:
    """Holds definitions by name.

    register() is a shallow merge: an incoming entry replaces an existing one
    with the same name entirely, keeping its original position. No field
    validation happens here.
    """

    def __init__(self, definitions: Mapping[str, Definition | Mapping[str, Any]] | None = None) -> None:
        self._definitions: dict[str, Definition] = {}
        if definitions:
            self.register(definitions)

    def register(self, definitions: Mapping[str, Definition | Mapping[str, Any]]) -> None:
        """Merge definitions into the registry (by-name overwrite).

        Values may be Definition instances or config mappings (see
        Definition.from_mapping). The mapping key is the definition name.
        """
        for name, entry in definitions.items():
            if isinstance(entry, Definition):
                definition = entry if entry.name == name else dataclasses.replace(entry, name=name)
            else:
                definition = Definition.from_mapping(name, entry)
            self._definitions[name] = definition

    def get(self, name: str) -> Definition:
        """Return the definition or raise UnknownDefinitionException."""
        try:
            return self._definitions[name]
        except KeyError:
            raise UnknownDefinitionException(name) from None

    def names(self) -> list[str]:
        return list(self._definitions)

    def __iter__(self) -> Iterator[Definition]:
        return iter(list(self._definitions.values()))

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)
