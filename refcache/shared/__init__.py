"""Shared utilities: telemetry and serialization helpers.

Used by application and infrastructure. No business logic.
"""

from refcache.shared.telemetry import get_logger, setup_logging, traced
from refcache.shared.utils import condition_fingerprint, jsonable_row

__all__ = [
    "condition_fingerprint",
    "get_logger",
    "jsonable_row",
    "setup_logging",
    "traced",
]
