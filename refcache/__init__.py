"""refcache: read-through reference-data cache.

Caches slowly-changing lookup tables (countries, states, cities, ...) per
owner namespace and resolves consumer keys against them in memory.
"""

from refcache.application.services.reference_cache import (
    ReferenceCache,
    attribute_accessor,
)
from refcache.domain.value_objects.definition import Definition

__all__ = ["Definition", "ReferenceCache", "attribute_accessor"]
