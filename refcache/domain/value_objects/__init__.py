"""Domain value objects."""

from refcache.domain.value_objects.definition import Definition

__all__ = ["Definition"]
