"""Tests for telemetry helpers (no tracer provider configured: no-op spans)."""

import logging

import pytest

from refcache.shared.telemetry.logging import get_logger, setup_logging
from refcache.shared.telemetry.tracing import add_span_attributes, traced


@traced("test.double")
async def _double(x: int) -> int:
    add_span_attributes(value=x)
    return x * 2


@traced()
async def _fail() -> None:
    raise RuntimeError("boom")


@pytest.mark.asyncio
async def test_traced_returns_result_and_keeps_name() -> None:
    assert await _double(4) == 8
    assert _double.__name__ == "_double"


@pytest.mark.asyncio
async def test_traced_reraises() -> None:
    with pytest.raises(RuntimeError, match="boom"):
        await _fail()


def test_setup_logging_respects_explicit_level() -> None:
    setup_logging(logging.WARNING)
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
    assert get_logger("refcache.test").name == "refcache.test"
