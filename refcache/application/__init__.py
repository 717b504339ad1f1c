"""Application layer: adapter protocols, registry, population and lookup.

Depends only on domain and protocol definitions (DIP). Infrastructure
implements the cache store and table source protocols.
"""

from refcache.application.dtos import BootstrapResult, DefinitionFailure
from refcache.application.interfaces import ICacheStore, ITableSource
from refcache.application.services import (
    DefinitionRegistry,
    LookupEngine,
    PopulationEngine,
    ReferenceCache,
    WorkingCopy,
)

__all__ = [
    "BootstrapResult",
    "DefinitionFailure",
    "DefinitionRegistry",
    "ICacheStore",
    "ITableSource",
    "LookupEngine",
    "PopulationEngine",
    "ReferenceCache",
    "WorkingCopy",
]
