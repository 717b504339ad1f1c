"""Cache stores: Redis service and in-process store.

Both implement ICacheStore. The reference cache writes one JSON document
per owner key (see refcache.core.keys).
"""

from refcache.infrastructure.cache.memory_cache import InMemoryCacheStore
from refcache.infrastructure.cache.redis_cache import CacheService

__all__ = ["CacheService", "InMemoryCacheStore"]
