"""Reference cache: consumer-facing surface over registry, population and lookup.

A consumer owns one ReferenceCache per owner namespace. It registers
definitions, bootstraps once (later bootstraps only fill namespaces that
are still missing) and resolves its own key values through an accessor
capability instead of reflecting into arbitrary object state.

Example:
    cache = ReferenceCache(store, table_source, attribute_accessor(address))
    await cache.initialize(
        "geo.Address",
        {
            "countries": {
                "table": "country",
                "namespace": "countries.active",
                "key_field": "code",
                "source_property": "country_code",
                "filter_condition": {"active": True},
            }
        },
    )
    [country] = cache.get_cached_entities("countries")
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from refcache.application.dtos.bootstrap import BootstrapResult
from refcache.application.interfaces.adapters import ICacheStore, ITableSource
from refcache.application.services.definition_registry import DefinitionRegistry
from refcache.application.services.lookup_engine import LookupEngine
from refcache.application.services.population_engine import PopulationEngine
from refcache.application.services.working_copy import WorkingCopy
from refcache.core.config import get_settings
from refcache.domain.exceptions import (
    OwnerNamespaceRequiredException,
    PropertyAccessorMissingException,
)
from refcache.domain.value_objects.definition import Definition

logger = logging.getLogger(__name__)

# Given a source property name, return its current value.
PropertyAccessor = Callable[[str], Any]


def attribute_accessor(obj: Any) -> PropertyAccessor:
    """Accessor reading source properties as attributes of obj (missing -> None)."""
    return lambda name: getattr(obj, name, None)


class ReferenceCache:
    """Registry + working copy for one owner namespace.

    Key prefix, TTL and the condition check default to Settings when not
    given explicitly.
    """

    def __init__(
        self,
        cache_store: ICacheStore,
        table_source: ITableSource,
        accessor: PropertyAccessor | None = None,
        *,
        key_prefix: str | None = None,
        ttl: int | None = None,
        condition_check: bool | None = None,
    ) -> None:
        settings = get_settings()
        self.accessor = accessor
        self.registry = DefinitionRegistry()
        self.engine = PopulationEngine(
            cache_store,
            table_source,
            key_prefix=key_prefix or settings.cache_key_prefix,
            ttl=ttl if ttl is not None else settings.cache_ttl_reference,
            condition_check=(
                condition_check
                if condition_check is not None
                else settings.reference_condition_check
            ),
        )
        self.owner_namespace: str | None = None
        self._working_copy: WorkingCopy | None = None

    @property
    def working_copy(self) -> WorkingCopy | None:
        return self._working_copy

    async def initialize(
        self,
        owner_namespace: str,
        definitions: Mapping[str, Definition | Mapping[str, Any]],
    ) -> BootstrapResult:
        """Register definitions and bootstrap owner_namespace."""
        self.add_definitions(definitions)
        return await self.bootstrap(owner_namespace)

    def add_definitions(
        self, definitions: Mapping[str, Definition | Mapping[str, Any]]
    ) -> None:
        """Register more definitions; populated namespaces are not refilled.

        New definitions are filled by the next bootstrap().
        """
        self.registry.register(definitions)

    async def bootstrap(self, owner_namespace: str | None = None) -> BootstrapResult:
        """Populate missing namespaces, reusing the loaded working copy.

        Args:
            owner_namespace: Required on first call; later calls reuse it.
                Passing a different namespace starts a new working copy.
        """
        owner_namespace = owner_namespace or self.owner_namespace
        if not owner_namespace:
            raise OwnerNamespaceRequiredException()
        if owner_namespace != self.owner_namespace:
            self.owner_namespace = owner_namespace
            self._working_copy = None
        self._working_copy, result = await self.engine.bootstrap(
            owner_namespace, self.registry, self._working_copy
        )
        return result

    def get_cached_entities(
        self, definition_name: str, accessor: PropertyAccessor | None = None
    ) -> list[Any]:
        """Resolve the consumer's source property value(s) for a definition.

        Returns one row per key (None when not cached), in key order. Before
        any bootstrap every key resolves to None.
        """
        definition = self.registry.get(definition_name)
        read = accessor or self.accessor
        if read is None:
            raise PropertyAccessorMissingException(definition_name)
        value = read(definition.require_source_property())
        return self.lookup(definition_name, value)

    def lookup(self, definition_name: str, value: Any) -> list[Any]:
        """Resolve explicit key value(s) for a definition (no accessor)."""
        working_copy = self._working_copy or self._unloaded()
        return LookupEngine(self.registry, working_copy).get_cached_entities(
            definition_name, value
        )

    async def refresh(self, definition_name: str) -> BootstrapResult:
        """Refetch one definition's namespace and write it through."""
        definition = self.registry.get(definition_name)
        if self._working_copy is None or not self._working_copy.is_loaded:
            return await self.bootstrap()
        self._working_copy.discard(definition.require_namespace())
        return await self.bootstrap()

    async def invalidate(self) -> bool:
        """Delete the owner key from the store and drop the working copy.

        Returns the store's delete result (False when never bootstrapped).
        """
        if self._working_copy is None:
            return False
        deleted = await self._working_copy.store.delete(self._working_copy.key)
        self._working_copy.reset()
        logger.info("Invalidated reference cache %s", self._working_copy.key)
        return deleted

    def _unloaded(self) -> WorkingCopy:
        return self.engine.working_copy_for(self.owner_namespace or "unbound")
