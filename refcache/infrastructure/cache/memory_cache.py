"""In-process cache store (non-distributed, non-persistent).

Values are kept as JSON text, like Redis holds them, so callers never share
mutable state with the store and keys come back as strings.
"""

from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)


class InMemoryCacheStore:
    """Dict-backed ICacheStore. TTL is accepted and ignored (no eviction)."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}

    def is_available(self) -> bool:
        return True

    async def get(self, key: str) -> Any | None:
        value = self._store.get(key)
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return json.loads(value)

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        try:
            self._store[key] = json.dumps(value)
        except (TypeError, ValueError):
            logger.exception("Cache value for key %s is not JSON-serializable", key)
            return False
        logger.debug("Cache SET: %s", key)
        return True

    async def delete(self, key: str) -> bool:
        self._store.pop(key, None)
        return True

    def put_raw(self, key: str, raw: str) -> None:
        """Store raw JSON text as-is (e.g. to seed a pre-existing entry)."""
        self._store[key] = raw

    def clear(self, prefix: str | None = None) -> None:
        """Clear all keys, or only keys starting with prefix."""
        if prefix is None:
            self._store.clear()
            return
        for key in list(self._store):
            if key.startswith(prefix):
                del self._store[key]

    def __contains__(self, key: object) -> bool:
        return key in self._store
