"""Tests for LookupEngine (order, duplicates, misses, scalar normalization)."""

import pytest

from refcache.application.services.definition_registry import DefinitionRegistry
from refcache.application.services.lookup_engine import LookupEngine, normalize_keys
from refcache.application.services.population_engine import PopulationEngine
from refcache.application.services.working_copy import WorkingCopy
from refcache.domain.exceptions import UnknownDefinitionException


@pytest.fixture
async def lookup(store, table_source, definitions) -> LookupEngine:
    registry = DefinitionRegistry(definitions)
    wc, _ = await PopulationEngine(store, table_source).bootstrap("geo.Address", registry)
    return LookupEngine(registry, wc)


@pytest.mark.asyncio
async def test_order_and_duplicates_preserved(lookup: LookupEngine) -> None:
    rows = lookup.get_cached_entities("states", [3, 1, 3])
    assert [r["name"] for r in rows] == ["Ontario", "New York", "Ontario"]
    assert rows[0] is rows[2]


@pytest.mark.asyncio
async def test_miss_returns_none_in_place(lookup: LookupEngine) -> None:
    rows = lookup.get_cached_entities("countries", ["US", "ZZ", "MX"])
    assert rows[0]["code"] == "US"
    assert rows[1] is None
    assert rows[2]["code"] == "MX"


@pytest.mark.asyncio
async def test_scalar_matches_one_element_sequence(lookup: LookupEngine) -> None:
    assert lookup.get_cached_entities("countries", "CA") == lookup.get_cached_entities(
        "countries", ["CA"]
    )
    assert lookup.get_cached_entities("states", 7) == lookup.get_cached_entities("states", [7])
    assert len(lookup.get_cached_entities("states", 7)) == 1


@pytest.mark.asyncio
async def test_string_and_int_keys_resolve_alike(lookup: LookupEngine) -> None:
    assert lookup.get_cached_entities("states", ["7"]) == lookup.get_cached_entities("states", [7])


@pytest.mark.asyncio
async def test_none_value_resolves_to_empty(lookup: LookupEngine) -> None:
    assert lookup.get_cached_entities("countries", None) == []
    assert lookup.get_cached_entities("countries", []) == []


@pytest.mark.asyncio
async def test_unknown_definition_raises(lookup: LookupEngine) -> None:
    with pytest.raises(UnknownDefinitionException):
        lookup.get_cached_entities("planets", ["earth"])


def test_unpopulated_namespace_resolves_every_key_to_none(store, definitions) -> None:
    """No bootstrap has run: every key is a miss, not an error."""
    engine = LookupEngine(DefinitionRegistry(definitions), WorkingCopy(store, "reference:x"))
    assert engine.get_cached_entities("countries", ["US", "CA"]) == [None, None]


def test_normalize_keys() -> None:
    assert normalize_keys(None) == []
    assert normalize_keys("US") == ["US"]
    assert normalize_keys(b"US") == [b"US"]
    assert normalize_keys(5) == [5]
    assert normalize_keys({"a": 1}) == [{"a": 1}]
    assert normalize_keys((3, 1, 3)) == [3, 1, 3]
    assert normalize_keys(k for k in (2, 2)) == [2, 2]
