"""Adapter protocols consumed by the population engine (DIP).

Both collaborators are black boxes that may be shared across tasks or
processes; timeouts and retries are their responsibility.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol


class ICacheStore(Protocol):
    """Key/value persistence medium (Redis, in-process dict, ...)."""

    def is_available(self) -> bool:
        """Return True if the store is connected and usable."""

    async def get(self, key: str) -> Any:
        """Return the stored value or None when absent/unavailable."""

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store value (optional native TTL in seconds). Returns True on success."""

    async def delete(self, key: str) -> bool:
        """Remove key. Returns True on success."""


class ITableSource(Protocol):
    """Backing data store queried on a cache miss."""

    async def fetch_keyed(
        self,
        table_identifier: Any,
        key_field: str,
        filter_condition: Any,
    ) -> Mapping[Any, Mapping[str, Any]]:
        """Return rows matching filter_condition keyed by their key_field value.

        Later rows overwrite earlier ones sharing a key_field value. Raises
        TableSourceException when the table or query fails.

        Keys are stored and looked up by their string form, so values whose
        str() is equal collide (1 and "1"), and values whose str() differs
        never match (1.0 does not find a row keyed by 1). Return keys of a
        single type per key_field.
        """
