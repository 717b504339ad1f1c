"""Runtime wiring: cache store + SQL table source + ReferenceCache.

Single place for startup/shutdown of infrastructure used by scripts and
host applications. No business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from refcache.application.services.reference_cache import (
    PropertyAccessor,
    ReferenceCache,
)
from refcache.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_runtime(
    accessor: PropertyAccessor | None = None,
) -> AsyncIterator[ReferenceCache]:
    """Yield a ReferenceCache wired to Redis (or in-process) and the SQL source.

    Startup order: cache store, SQL session. Shutdown order: session close,
    cache disconnect, engine dispose. Raises TableSourceNotConfiguredException
    when DATABASE_URL is unset.
    """
    from refcache.infrastructure.cache import CacheService, InMemoryCacheStore
    from refcache.infrastructure.persistence import models  # noqa: F401  registers tables
    from refcache.infrastructure.persistence.database import (
        dispose_engine,
        get_session_factory,
    )
    from refcache.infrastructure.persistence.table_source import SqlAlchemyTableSource

    settings = get_settings()
    session_factory = get_session_factory()

    redis_cache: CacheService | None = None
    if settings.redis_enabled:
        redis_cache = CacheService()
        await redis_cache.connect()
        store = redis_cache
    else:
        logger.info("Redis disabled; using in-process reference cache store")
        store = InMemoryCacheStore()

    try:
        async with session_factory() as session:
            yield ReferenceCache(store, SqlAlchemyTableSource(session), accessor)
    finally:
        if redis_cache is not None:
            await redis_cache.disconnect()
        await dispose_engine()
