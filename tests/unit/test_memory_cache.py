"""Tests for InMemoryCacheStore."""

import pytest

from refcache.infrastructure.cache.memory_cache import InMemoryCacheStore


@pytest.mark.asyncio
async def test_values_are_copied_through_json(store: InMemoryCacheStore) -> None:
    value = {"states": {"entities": {1: {"id": 1}}}}
    assert await store.set("k", value) is True
    loaded = await store.get("k")
    assert loaded == {"states": {"entities": {"1": {"id": 1}}}}
    loaded["states"]["entities"].clear()
    assert (await store.get("k"))["states"]["entities"] == {"1": {"id": 1}}


@pytest.mark.asyncio
async def test_get_missing_and_delete(store: InMemoryCacheStore) -> None:
    assert await store.get("missing") is None
    await store.set("k", [1])
    assert await store.delete("k") is True
    assert "k" not in store


@pytest.mark.asyncio
async def test_unserializable_value_is_rejected(store: InMemoryCacheStore) -> None:
    assert await store.set("k", {"a": object()}) is False
    assert "k" not in store


@pytest.mark.asyncio
async def test_clear_by_prefix(store: InMemoryCacheStore) -> None:
    await store.set("reference:a", {})
    await store.set("reference:b", {})
    await store.set("other:c", {})
    store.clear("reference:")
    assert "reference:a" not in store
    assert "other:c" in store
    store.clear()
    assert "other:c" not in store
    assert store.is_available()
