"""Reference definition: how one cached list is sourced, keyed and stored.

A definition is pure configuration. Required fields are not validated at
construction; the require_* accessors raise when a field is actually needed.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from refcache.core.constants import DEFAULT_CONDITION_KIND
from refcache.domain.exceptions import (
    MissingDefinitionFieldException,
    MissingTableIdentifierException,
)

# Accepted spellings for each field when building from a config mapping.
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "table_identifier": ("table_identifier", "tableIdentifier", "table", "tableRegistryAlias"),
    "namespace": ("namespace", "entity_namespace", "entityNamespace"),
    "key_field": ("key_field", "keyField"),
    "source_property": ("source_property", "sourceProperty", "referenceProperty"),
    "filter_condition": ("filter_condition", "filterCondition"),
}


def _first_present(data: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


@dataclass(frozen=True)
class Definition:
    """One cacheable reference list.

    Attributes:
        name: Unique name within a registry.
        table_identifier: Opaque handle naming the backing table (table name,
            SQLAlchemy Table or mapped class).
        namespace: Key under the owner namespace where entities are stored.
            Must already encode any condition-based distinction.
        key_field: Column whose value keys each row.
        source_property: Consumer field holding the key value(s) to resolve.
        filter_condition: Opaque filter passed verbatim to the table source.
    """

    name: str
    table_identifier: Any = None
    namespace: str | None = None
    key_field: str | None = None
    source_property: str | None = None
    filter_condition: Any = None

    @classmethod
    def from_mapping(cls, name: str, data: Mapping[str, Any]) -> Definition:
        """Build a definition from a config mapping.

        Accepts snake_case keys, camelCase keys and a conditions map
        ({"conditions": {"where": {...}}}) as the filter condition.
        """
        values = {attr: _first_present(data, keys) for attr, keys in _FIELD_ALIASES.items()}
        if values["filter_condition"] is None:
            conditions = data.get("conditions")
            if isinstance(conditions, Mapping):
                values["filter_condition"] = conditions.get(DEFAULT_CONDITION_KIND)
        return cls(name=name, **values)

    def require_table_identifier(self) -> Any:
        """Return table_identifier or raise MissingTableIdentifierException if absent/empty."""
        if _is_blank(self.table_identifier):
            raise MissingTableIdentifierException(self.name)
        return self.table_identifier

    def require_namespace(self) -> str:
        """Return namespace or raise MissingDefinitionFieldException."""
        if _is_blank(self.namespace):
            raise MissingDefinitionFieldException(self.name, "namespace")
        return str(self.namespace)

    def require_key_field(self) -> str:
        """Return key_field or raise MissingDefinitionFieldException."""
        if _is_blank(self.key_field):
            raise MissingDefinitionFieldException(self.name, "key_field")
        return str(self.key_field)

    def require_source_property(self) -> str:
        """Return source_property or raise MissingDefinitionFieldException."""
        if _is_blank(self.source_property):
            raise MissingDefinitionFieldException(self.name, "source_property")
        return str(self.source_property)

    @property
    def condition(self) -> Any:
        """Filter condition, defaulting to an empty mapping (no filter)."""
        return self.filter_condition if self.filter_condition is not None else {}
