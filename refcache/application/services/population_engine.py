"""Population engine: fill each definition's namespace on a cache miss.

For every registered definition, in registration order:
1. skip when the namespace is already in the working copy,
2. otherwise fetch rows from the table source keyed by key_field,
3. write the whole working copy back to the store before the next definition.

A failing definition is recorded in the result and does not stop the others;
everything populated before it has already been written through.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from refcache.application.dtos.bootstrap import BootstrapResult, DefinitionFailure
from refcache.application.interfaces.adapters import ICacheStore, ITableSource
from refcache.application.services.definition_registry import DefinitionRegistry
from refcache.application.services.working_copy import WorkingCopy
from refcache.core.constants import CACHE_PREFIX_REFERENCE, SCAFFOLD_CONDITION_HASH
from refcache.core.keys import owner_key
from refcache.domain.exceptions import ReferenceCacheException, TableSourceException
from refcache.domain.value_objects.definition import Definition
from refcache.shared.telemetry.tracing import add_span_attributes, traced
from refcache.shared.utils.serialization import (
    condition_fingerprint,
    entity_key,
    jsonable,
)

logger = logging.getLogger(__name__)


class PopulationEngine:
    """Bootstraps working copies from the cache store, falling back to the table source."""

    def __init__(
        self,
        cache_store: ICacheStore,
        table_source: ITableSource,
        *,
        key_prefix: str = CACHE_PREFIX_REFERENCE,
        ttl: int | None = None,
        condition_check: bool = True,
    ) -> None:
        self.cache_store = cache_store
        self.table_source = table_source
        self.key_prefix = key_prefix
        self.ttl = ttl
        self.condition_check = condition_check

    def working_copy_for(self, owner_namespace: str) -> WorkingCopy:
        """New, unloaded working copy for owner_namespace."""
        return WorkingCopy(
            self.cache_store, owner_key(owner_namespace, self.key_prefix), ttl=self.ttl
        )

    @traced("refcache.bootstrap")
    async def bootstrap(
        self,
        owner_namespace: str,
        registry: DefinitionRegistry,
        working_copy: WorkingCopy | None = None,
    ) -> tuple[WorkingCopy, BootstrapResult]:
        """Populate every missing definition namespace for owner_namespace.

        Args:
            owner_namespace: Caller-chosen owner identity (outer cache key).
            registry: Definitions to populate, in registration order.
            working_copy: Existing working copy to reuse; loaded from the store
                only if it is not loaded yet.

        Returns:
            The working copy and a per-definition result.
        """
        if working_copy is None:
            working_copy = self.working_copy_for(owner_namespace)
        if not working_copy.is_loaded:
            await working_copy.load()

        result = BootstrapResult(owner_key=working_copy.key)
        for definition in registry:
            try:
                filled = await self._populate(working_copy, definition)
            except ReferenceCacheException as e:
                logger.error(
                    "Reference definition %s failed (%s): %s",
                    definition.name,
                    e.error_code,
                    e.message,
                )
                result.failed.append(DefinitionFailure(definition.name, e))
                continue
            except Exception as e:
                wrapped = TableSourceException(
                    str(definition.table_identifier), f"{type(e).__name__}: {e}"
                )
                logger.exception(
                    "Reference definition %s failed (%s): %s",
                    definition.name,
                    wrapped.error_code,
                    wrapped.message,
                )
                result.failed.append(DefinitionFailure(definition.name, wrapped))
                continue
            if not filled:
                result.skipped.append(definition.name)
                continue
            result.populated.append(definition.name)
            if not await working_copy.flush():
                logger.warning(
                    "Write-through of %s after %s failed; entities kept in memory only",
                    working_copy.key,
                    definition.name,
                )
                result.unpersisted.append(definition.name)

        add_span_attributes(
            owner_key=working_copy.key,
            populated=len(result.populated),
            skipped=len(result.skipped),
            failed=len(result.failed),
        )
        return working_copy, result

    async def _populate(self, working_copy: WorkingCopy, definition: Definition) -> bool:
        """Fill one namespace. Returns False when it was already cached."""
        namespace = definition.require_namespace()
        condition = definition.condition
        fingerprint = condition_fingerprint(condition) if self.condition_check else None

        existing = working_copy.scaffold(namespace)
        if existing is not None:
            cached_hash = existing.get(SCAFFOLD_CONDITION_HASH)
            if fingerprint is None or cached_hash is None or cached_hash == fingerprint:
                logger.debug("Reference namespace %s already cached", namespace)
                return False
            logger.warning(
                "Filter condition for namespace %s changed (definition %s); refilling",
                namespace,
                definition.name,
            )

        key_field = definition.require_key_field()
        table_identifier = definition.require_table_identifier()
        rows = await self.table_source.fetch_keyed(table_identifier, key_field, condition)
        working_copy.put(namespace, _to_entities(rows), fingerprint)
        logger.info(
            "Populated reference namespace %s from %s (%d rows)",
            namespace,
            table_identifier,
            len(rows),
        )
        return True


def _to_entities(rows: Mapping[Any, Any]) -> dict[str, Any]:
    """Stringify keys and make rows JSON-safe; later keys win on collision."""
    return {entity_key(key): jsonable(row) for key, row in rows.items()}
