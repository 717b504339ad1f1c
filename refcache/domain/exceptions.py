"""Domain exceptions for refcache.

Configuration errors (unknown definition, missing table identifier or
field) are caller-visible. Storage-shape anomalies are recovered from by
the working copy. Lookup misses are never exceptions.
"""

from typing import Any


class ReferenceCacheException(Exception):
    """Base exception for all refcache errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. definition, table).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class UnknownDefinitionException(ReferenceCacheException):
    """Raised when a definition name was never registered."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Unknown reference definition: {name}",
            "UNKNOWN_DEFINITION",
            {"definition": name},
        )


class MissingTableIdentifierException(ReferenceCacheException):
    """Raised when a definition has no table identifier to populate from."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Missing table identifier for definition: {name}",
            "MISSING_TABLE_IDENTIFIER",
            {"definition": name},
        )


class MissingDefinitionFieldException(ReferenceCacheException):
    """Raised when a required definition field (namespace, key_field, ...) is absent."""

    def __init__(self, name: str, field: str) -> None:
        super().__init__(
            f"Missing {field} for definition: {name}",
            "MISSING_DEFINITION_FIELD",
            {"definition": name, "field": field},
        )


class MalformedCacheEntryException(ReferenceCacheException):
    """Cached value under an owner key is not the expected two-level mapping.

    Never escapes the working copy: a malformed entry is treated as a cold cache.
    """

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            f"Malformed cache entry for key {key}: {reason}",
            "MALFORMED_CACHE_ENTRY",
            {"key": key, "reason": reason},
        )


class TableSourceException(ReferenceCacheException):
    """Fetching rows from the backing table failed."""

    def __init__(self, table: str, reason: str) -> None:
        super().__init__(
            f"Failed to fetch reference rows from {table}: {reason}",
            "TABLE_SOURCE_ERROR",
            {"table": table, "reason": reason},
        )


class TableSourceNotConfiguredException(ReferenceCacheException):
    """Raised when the SQL table source is requested but DATABASE_URL is unset."""

    def __init__(self) -> None:
        super().__init__(
            "SQL table source is not configured. Set DATABASE_URL.",
            "TABLE_SOURCE_NOT_CONFIGURED",
        )


class WorkingCopyNotLoadedException(ReferenceCacheException):
    """Raised when a working copy is flushed before it was loaded."""

    def __init__(self, key: str) -> None:
        super().__init__(
            f"Working copy for {key} was flushed before load",
            "WORKING_COPY_NOT_LOADED",
            {"key": key},
        )


class OwnerNamespaceRequiredException(ReferenceCacheException):
    """Raised when bootstrap runs before any owner namespace was given."""

    def __init__(self) -> None:
        super().__init__(
            "owner_namespace is required for the first bootstrap",
            "OWNER_NAMESPACE_REQUIRED",
        )


class PropertyAccessorMissingException(ReferenceCacheException):
    """Raised when get_cached_entities has no accessor to read the source property."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"No property accessor configured to resolve definition: {name}",
            "PROPERTY_ACCESSOR_MISSING",
            {"definition": name},
        )
