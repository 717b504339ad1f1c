"""Working copy: in-memory materialization of one owner's cached mapping.

Two-phase protocol: load() reads the owner key from the cache store once;
flush() writes the whole mapping back. Between the two the store is never
read again. Layout:

    {<definition namespace>: {"entities": {<key>: <row>}, "condition_hash": "..."}}
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from refcache.application.interfaces.adapters import ICacheStore
from refcache.core.constants import SCAFFOLD_CONDITION_HASH, SCAFFOLD_ENTITIES
from refcache.domain.exceptions import (
    MalformedCacheEntryException,
    WorkingCopyNotLoadedException,
)

logger = logging.getLogger(__name__)


def new_scaffold(
    entities: Mapping[str, Any] | None = None, condition_hash: str | None = None
) -> dict[str, Any]:
    """Fresh scaffold record for one definition namespace."""
    scaffold: dict[str, Any] = {SCAFFOLD_ENTITIES: dict(entities or {})}
    if condition_hash is not None:
        scaffold[SCAFFOLD_CONDITION_HASH] = condition_hash
    return scaffold


def parse_cached(key: str, raw: Any) -> dict[str, dict[str, Any]]:
    """Validate a value read from the store and return the usable part.

    Raises MalformedCacheEntryException when the outer value is not a mapping.
    Namespaces whose scaffold is malformed are dropped (they refill on
    the next bootstrap).
    """
    if not isinstance(raw, Mapping):
        raise MalformedCacheEntryException(key, f"expected mapping, got {type(raw).__name__}")
    data: dict[str, dict[str, Any]] = {}
    for namespace, scaffold in raw.items():
        if not isinstance(scaffold, Mapping) or not isinstance(
            scaffold.get(SCAFFOLD_ENTITIES), Mapping
        ):
            logger.warning(
                "Dropping malformed scaffold %r under cache key %s", namespace, key
            )
            continue
        data[str(namespace)] = dict(scaffold)
    return data


class WorkingCopy:
    """Loaded/unloaded state holder for an owner key.

    While unloaded every namespace reads as empty, so lookups stay total.
    """

    def __init__(self, store: ICacheStore, key: str, ttl: int | None = None) -> None:
        self.store = store
        self.key = key
        self.ttl = ttl
        self._data: dict[str, dict[str, Any]] = {}
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    async def load(self) -> None:
        """Read the owner key from the store; absent or malformed means cold."""
        raw = await self.store.get(self.key)
        if raw is None:
            logger.debug("Reference cache cold for %s", self.key)
            self._data = {}
        else:
            try:
                self._data = parse_cached(self.key, raw)
            except MalformedCacheEntryException as e:
                logger.warning("%s; starting cold", e.message)
                self._data = {}
        self._loaded = True

    async def flush(self) -> bool:
        """Write the whole mapping back to the store. Returns the store's result."""
        if not self._loaded:
            raise WorkingCopyNotLoadedException(self.key)
        return await self.store.set(self.key, self._data, ttl=self.ttl)

    def reset(self) -> None:
        """Discard in-memory state and return to unloaded."""
        self._data = {}
        self._loaded = False

    def has(self, namespace: str) -> bool:
        return namespace in self._data

    def scaffold(self, namespace: str) -> dict[str, Any] | None:
        return self._data.get(namespace)

    def put(
        self,
        namespace: str,
        entities: Mapping[str, Any],
        condition_hash: str | None = None,
    ) -> None:
        self._data[namespace] = new_scaffold(entities, condition_hash)

    def discard(self, namespace: str) -> None:
        self._data.pop(namespace, None)

    def entities(self, namespace: str) -> Mapping[str, Any]:
        """Entities cached under namespace; empty when not populated."""
        scaffold = self._data.get(namespace)
        if scaffold is None:
            return {}
        return scaffold[SCAFFOLD_ENTITIES]

    def namespaces(self) -> list[str]:
        return list(self._data)

    def as_dict(self) -> dict[str, dict[str, Any]]:
        return self._data
