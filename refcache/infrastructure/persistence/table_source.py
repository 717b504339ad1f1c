"""SQLAlchemy table source: rows of a reference table keyed by one column.

Table identifiers may be a table name (looked up in the metadata), a Table,
or a mapped class. Filter conditions may be:
- a mapping of column -> value (equality; list/tuple/set -> IN; None -> IS NULL),
- a SQLAlchemy boolean expression, or a list of them (AND-ed),
- None / empty mapping for no filter.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import MetaData, Select, Table, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from refcache.domain.exceptions import TableSourceException
from refcache.infrastructure.persistence.database import Base
from refcache.shared.utils.serialization import jsonable_row

logger = logging.getLogger(__name__)


class SqlAlchemyTableSource:
    """ITableSource over an AsyncSession."""

    def __init__(self, db: AsyncSession, metadata: MetaData | None = None) -> None:
        self.db = db
        self.metadata = metadata if metadata is not None else Base.metadata

    def resolve_table(self, table_identifier: Any) -> Table:
        """Return the Table for an identifier or raise TableSourceException."""
        if isinstance(table_identifier, Table):
            return table_identifier
        mapped = getattr(table_identifier, "__table__", None)
        if isinstance(mapped, Table):
            return mapped
        if isinstance(table_identifier, str):
            table = self.metadata.tables.get(table_identifier)
            if table is None:
                raise TableSourceException(table_identifier, "unknown table")
            return table
        raise TableSourceException(repr(table_identifier), "unsupported table identifier")

    def build_statement(self, table: Table, filter_condition: Any) -> Select:
        """SELECT all columns of table filtered by filter_condition."""
        return select(table).where(*self._where_clauses(table, filter_condition))

    def _where_clauses(self, table: Table, condition: Any) -> list[Any]:
        if condition is None:
            return []
        if isinstance(condition, ColumnElement):
            return [condition]
        if isinstance(condition, Mapping):
            clauses = []
            for column_name, value in condition.items():
                column = table.c.get(column_name)
                if column is None:
                    raise TableSourceException(
                        table.name, f"unknown filter column {column_name!r}"
                    )
                if value is None:
                    clauses.append(column.is_(None))
                elif isinstance(value, (list, tuple, set, frozenset)):
                    clauses.append(column.in_(list(value)))
                else:
                    clauses.append(column == value)
            return clauses
        if isinstance(condition, (list, tuple)) and all(
            isinstance(c, ColumnElement) for c in condition
        ):
            return list(condition)
        raise TableSourceException(table.name, f"unsupported filter condition {condition!r}")

    async def fetch_keyed(
        self,
        table_identifier: Any,
        key_field: str,
        filter_condition: Any,
    ) -> dict[Any, dict[str, Any]]:
        """Return JSON-safe rows keyed by key_field (later rows win on duplicates)."""
        table = self.resolve_table(table_identifier)
        if key_field not in table.c:
            raise TableSourceException(table.name, f"unknown key field {key_field!r}")
        stmt = self.build_statement(table, filter_condition)
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            # A failed statement aborts the shared transaction on PostgreSQL.
            await self._rollback(table.name)
            raise TableSourceException(table.name, str(e)) from e
        rows: dict[Any, dict[str, Any]] = {}
        for row in result.mappings():
            rows[row[key_field]] = jsonable_row(row)
        logger.debug("Fetched %d rows from %s keyed by %s", len(rows), table.name, key_field)
        return rows

    async def _rollback(self, table_name: str) -> None:
        try:
            await self.db.rollback()
        except SQLAlchemyError as rollback_exc:
            logger.warning(
                "Rollback after failed fetch from %s also failed: %s", table_name, rollback_exc
            )
