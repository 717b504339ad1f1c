"""JSON-safe conversion for cached rows and filter conditions.

Cached payloads travel through JSON (Redis), so row values are converted
up front: datetimes and dates to ISO strings, Decimal to str, Enum to its
value. Mapping keys become strings, which is also how entity keys are
stored.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from sqlalchemy.exc import CompileError
from sqlalchemy.sql.elements import ClauseElement


def jsonable(value: Any) -> Any:
    """Return a JSON-serializable copy of value."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Enum):
        return jsonable(value.value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, Mapping):
        return {str(k): jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [jsonable(v) for v in value]
    if isinstance(value, ClauseElement):
        return sql_text(value)
    return str(value)


def sql_text(expr: ClauseElement) -> str:
    """SQL for expr with bound values inlined.

    Plain str(expr) renders placeholders (code = :code_1), which would make
    conditions on different values indistinguishable.
    """
    try:
        return str(expr.compile(compile_kwargs={"literal_binds": True}))
    except (CompileError, NotImplementedError):
        compiled = expr.compile()
        params = sorted((k, repr(v)) for k, v in compiled.params.items())
        return f"{compiled} {params}"


def jsonable_row(row: Mapping[str, Any]) -> dict[str, Any]:
    """Map a DB row (column -> value) to a JSON-safe dict."""
    return {str(column): jsonable(value) for column, value in row.items()}


def canonical_json(data: Any) -> str:
    """Canonical JSON for deterministic hashing."""
    return json.dumps(jsonable(data), sort_keys=True, separators=(",", ":"))


def condition_fingerprint(condition: Any) -> str:
    """SHA-256 of the canonical JSON of a filter condition.

    SQL expressions are rendered with their bound values. Other non-JSON
    values fall back to str(), so the fingerprint is stable as long as their
    string form is.
    """
    return hashlib.sha256(canonical_json(condition).encode()).hexdigest()


def entity_key(value: Any) -> str:
    """Key under which a row is stored in a scaffold's entities mapping.

    The cache medium is JSON, whose object keys are strings, so key-field
    values are stored and looked up in their string form (3 and "3" match).
    """
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)
