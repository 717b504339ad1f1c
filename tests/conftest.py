"""Pytest configuration and fixtures for refcache.

Unit tests use an in-process cache store and a fake table source that
records every fetch. DB-dependent fixtures skip when no database is
configured; run without DB via: pytest -m 'not requires_db'.
"""

from collections.abc import Mapping
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from refcache.core.config import get_settings
from refcache.domain.exceptions import TableSourceException
from refcache.infrastructure.cache.memory_cache import InMemoryCacheStore

COUNTRIES = {
    "US": {"id": 1, "code": "US", "name": "United States", "active": True},
    "CA": {"id": 2, "code": "CA", "name": "Canada", "active": True},
    "MX": {"id": 3, "code": "MX", "name": "Mexico", "active": True},
}

STATES = {
    1: {"id": 1, "code": "NY", "name": "New York"},
    3: {"id": 3, "code": "ON", "name": "Ontario"},
    7: {"id": 7, "code": "JA", "name": "Jalisco"},
}


class FakeTableSource:
    """ITableSource double: serves canned tables and counts fetches.

    Tables listed in failing raise TableSourceException on fetch.
    """

    def __init__(
        self,
        tables: Mapping[str, Mapping[Any, Mapping[str, Any]]] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.tables = dict(tables or {"country": COUNTRIES, "state": STATES})
        self.failing = set(failing or ())
        self.calls: list[tuple[Any, str, Any]] = []

    async def fetch_keyed(
        self, table_identifier: Any, key_field: str, filter_condition: Any
    ) -> dict[Any, dict[str, Any]]:
        self.calls.append((table_identifier, key_field, filter_condition))
        if table_identifier in self.failing:
            raise TableSourceException(str(table_identifier), "connection reset")
        rows = self.tables.get(table_identifier)
        if rows is None:
            raise TableSourceException(str(table_identifier), "unknown table")
        return {key: dict(row) for key, row in rows.items()}

    def fetch_count(self, table_identifier: Any) -> int:
        return sum(1 for call in self.calls if call[0] == table_identifier)


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    """Isolate Settings from the developer's environment and .env."""
    for var in ("CACHE_KEY_PREFIX", "CACHE_TTL_REFERENCE", "REFERENCE_CONDITION_CHECK"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store() -> InMemoryCacheStore:
    """Empty in-process cache store."""
    return InMemoryCacheStore()


@pytest.fixture
def table_source() -> FakeTableSource:
    """Fake table source with country and state tables."""
    return FakeTableSource()


@pytest.fixture
def definitions() -> dict[str, dict[str, Any]]:
    """Country and state definitions in config-mapping form."""
    return {
        "countries": {
            "table": "country",
            "namespace": "countries.active",
            "key_field": "code",
            "source_property": "country_code",
            "filter_condition": {"active": True},
        },
        "states": {
            "table": "state",
            "namespace": "states.all",
            "key_field": "id",
            "source_property": "state_ids",
        },
    }


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for integration tests. Rolls back after test.

    Requires DATABASE_URL. Skips (pytest.skip) when it is not configured.
    """
    from refcache.infrastructure.persistence.database import get_session_factory
    from refcache.domain.exceptions import TableSourceNotConfiguredException

    try:
        session_factory = get_session_factory()
    except TableSourceNotConfiguredException:
        pytest.skip("Database not configured: set DATABASE_URL (postgresql+asyncpg://...)")
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def table_source_factory() -> type[FakeTableSource]:
    """FakeTableSource class, for tests that need custom tables or failures."""
    return FakeTableSource
