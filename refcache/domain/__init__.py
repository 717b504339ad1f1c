"""Domain layer: definition value object and exceptions.

No dependencies on infrastructure. Used by application and
infrastructure layers.
"""

from refcache.domain.exceptions import (
    MalformedCacheEntryException,
    MissingDefinitionFieldException,
    MissingTableIdentifierException,
    OwnerNamespaceRequiredException,
    PropertyAccessorMissingException,
    ReferenceCacheException,
    TableSourceException,
    TableSourceNotConfiguredException,
    UnknownDefinitionException,
    WorkingCopyNotLoadedException,
)
from refcache.domain.value_objects import Definition

__all__ = [
    "Definition",
    "MalformedCacheEntryException",
    "MissingDefinitionFieldException",
    "MissingTableIdentifierException",
    "OwnerNamespaceRequiredException",
    "PropertyAccessorMissingException",
    "ReferenceCacheException",
    "TableSourceException",
    "TableSourceNotConfiguredException",
    "UnknownDefinitionException",
    "WorkingCopyNotLoadedException",
]
