"""Shared telemetry: logging setup and tracing helpers."""

from refcache.shared.telemetry.logging import get_logger, setup_logging
from refcache.shared.telemetry.tracing import add_span_attributes, traced

__all__ = [
    "setup_logging",
    "get_logger",
    "add_span_attributes",
    "traced",
]
