"""Unit tests for SqlAlchemyTableSource with a mocked AsyncSession."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from refcache.domain.exceptions import TableSourceException
from refcache.infrastructure.persistence.models import City, Country
from refcache.infrastructure.persistence.table_source import SqlAlchemyTableSource


def _session_returning(rows: list[dict]) -> AsyncMock:
    result = MagicMock()
    result.mappings.return_value = rows
    db = AsyncMock()
    db.execute = AsyncMock(return_value=result)
    return db


def _sql(stmt) -> str:
    return str(stmt.compile(compile_kwargs={"literal_binds": True}))


def test_resolve_table_by_name_model_and_table() -> None:
    source = SqlAlchemyTableSource(AsyncMock())
    assert source.resolve_table("country") is Country.__table__
    assert source.resolve_table(Country) is Country.__table__
    assert source.resolve_table(City.__table__) is City.__table__


def test_resolve_unknown_table_raises() -> None:
    source = SqlAlchemyTableSource(AsyncMock())
    with pytest.raises(TableSourceException) as exc_info:
        source.resolve_table("planet")
    assert exc_info.value.error_code == "TABLE_SOURCE_ERROR"
    with pytest.raises(TableSourceException):
        source.resolve_table(42)


def test_mapping_condition_builds_where_clause() -> None:
    source = SqlAlchemyTableSource(AsyncMock())
    sql = _sql(source.build_statement(Country.__table__, {"code": ["US", "CA"], "name": "Canada"}))
    assert "WHERE" in sql
    assert "country.code IN" in sql
    assert "country.name = 'Canada'" in sql


def test_none_value_and_expression_conditions() -> None:
    source = SqlAlchemyTableSource(AsyncMock())
    assert "IS NULL" in _sql(source.build_statement(City.__table__, {"population": None}))
    expr = City.__table__.c.population > 1000
    assert "city.population > 1000" in _sql(source.build_statement(City.__table__, expr))
    assert "WHERE" not in _sql(source.build_statement(City.__table__, None))
    assert "WHERE" not in _sql(source.build_statement(City.__table__, {}))


def test_unknown_filter_column_and_unsupported_condition_raise() -> None:
    source = SqlAlchemyTableSource(AsyncMock())
    with pytest.raises(TableSourceException):
        source.build_statement(Country.__table__, {"continent": "EU"})
    with pytest.raises(TableSourceException):
        source.build_statement(Country.__table__, "active = 1")


@pytest.mark.asyncio
async def test_fetch_keyed_keys_rows_by_field() -> None:
    created = datetime(2024, 5, 1, tzinfo=timezone.utc)
    db = _session_returning(
        [
            {"id": 1, "code": "US", "name": "United States", "created_at": created},
            {"id": 2, "code": "CA", "name": "Canada", "created_at": created},
        ]
    )
    rows = await SqlAlchemyTableSource(db).fetch_keyed("country", "code", {"active": True})

    assert list(rows) == ["US", "CA"]
    assert rows["CA"]["name"] == "Canada"
    assert rows["US"]["created_at"] == "2024-05-01T00:00:00+00:00"
    db.execute.assert_awaited_once()


@pytest.mark.asyncio
async def test_fetch_keyed_later_rows_overwrite_duplicates() -> None:
    db = _session_returning(
        [
            {"id": 1, "state_id": 5, "name": "Springfield"},
            {"id": 2, "state_id": 5, "name": "Shelbyville"},
        ]
    )
    rows = await SqlAlchemyTableSource(db).fetch_keyed("city", "state_id", None)
    assert rows == {5: {"id": 2, "state_id": 5, "name": "Shelbyville"}}


@pytest.mark.asyncio
async def test_fetch_keyed_unknown_key_field_raises() -> None:
    db = _session_returning([])
    with pytest.raises(TableSourceException):
        await SqlAlchemyTableSource(db).fetch_keyed("country", "iso3", None)
    db.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_fetch_keyed_wraps_sqlalchemy_errors() -> None:
    db = AsyncMock()
    db.execute = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("gone")))
    with pytest.raises(TableSourceException) as exc_info:
        await SqlAlchemyTableSource(db).fetch_keyed("country", "code", None)
    assert exc_info.value.details["table"] == "country"


@pytest.mark.asyncio
async def test_failed_fetch_rolls_back_so_next_fetch_runs() -> None:
    rows = MagicMock()
    rows.mappings.return_value = [{"id": 1, "code": "US", "name": "United States"}]
    db = AsyncMock()
    db.execute = AsyncMock(
        side_effect=[OperationalError("SELECT", {}, Exception("bad filter")), rows]
    )
    source = SqlAlchemyTableSource(db)

    with pytest.raises(TableSourceException):
        await source.fetch_keyed("country", "code", None)
    db.rollback.assert_awaited_once()

    assert list(await source.fetch_keyed("country", "code", None)) == ["US"]


@pytest.mark.asyncio
async def test_failed_rollback_still_raises_table_source_error() -> None:
    db = AsyncMock()
    db.execute = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("gone")))
    db.rollback = AsyncMock(side_effect=OperationalError("ROLLBACK", {}, Exception("gone")))
    with pytest.raises(TableSourceException) as exc_info:
        await SqlAlchemyTableSource(db).fetch_keyed("country", "code", None)
    assert exc_info.value.details["table"] == "country"
