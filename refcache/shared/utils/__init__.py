"""Shared utilities: row serialization, entity keys and condition fingerprints."""

from refcache.shared.utils.serialization import (
    canonical_json,
    condition_fingerprint,
    entity_key,
    jsonable,
    jsonable_row,
)

__all__ = [
    "canonical_json",
    "condition_fingerprint",
    "entity_key",
    "jsonable",
    "jsonable_row",
]
