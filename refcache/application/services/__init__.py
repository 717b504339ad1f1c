"""Application services: registry, working copy, population, lookup, facade."""

from refcache.application.services.definition_registry import DefinitionRegistry
from refcache.application.services.lookup_engine import (
    MISSING,
    LookupEngine,
    normalize_keys,
)
from refcache.application.services.population_engine import PopulationEngine
from refcache.application.services.reference_cache import (
    PropertyAccessor,
    ReferenceCache,
    attribute_accessor,
)
from refcache.application.services.working_copy import WorkingCopy

__all__ = [
    "MISSING",
    "DefinitionRegistry",
    "LookupEngine",
    "PopulationEngine",
    "PropertyAccessor",
    "ReferenceCache",
    "WorkingCopy",
    "attribute_accessor",
    "normalize_keys",
]
