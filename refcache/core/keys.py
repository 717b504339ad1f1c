"""Cache key builders. Single place for key format (DRY).

The owner namespace is caller-chosen (e.g. "geo.Address") and must not
contain CACHE_KEY_SEP to avoid ambiguous or colliding keys.
"""

from refcache.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_REFERENCE


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value is empty or contains CACHE_KEY_SEP.
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must be a non-empty string")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def owner_key(owner_namespace: str, prefix: str = CACHE_PREFIX_REFERENCE) -> str:
    """Cache key under which an owner's whole two-level mapping is stored."""
    _validate_key_component(owner_namespace, "owner_namespace")
    return f"{prefix}{CACHE_KEY_SEP}{owner_namespace}"
