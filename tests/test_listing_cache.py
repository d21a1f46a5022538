"""
Tests for the read-through listing cache.
"""

import json

import pytest

from cloud_services.errors import DependencyError
from cloud_services.metrics import ServiceMetrics
from cloud_services.services import ListingCache

KEY = "users:all"
ROWS = [{"id": 1, "name": "Ada"}, {"id": 2, "name": "Linus"}]


class CountingLoader:
    def __init__(self, rows=None, error=None):
        self.rows = rows if rows is not None else ROWS
        self.error = error
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.rows)


@pytest.fixture
def metrics():
    return ServiceMetrics(entity="user")


@pytest.fixture
def listing_cache(cache, metrics):
    return ListingCache(cache=cache, key=KEY, ttl=60, metrics=metrics, cache_type="users_list")


def sample(metrics, name):
    return metrics.registry.get_sample_value(name, {"cache_type": "users_list"}) or 0


@pytest.mark.asyncio
async def test_miss_loads_and_populates(listing_cache, cache, metrics):
    loader = CountingLoader()

    listing = await listing_cache.get_or_load(loader)

    assert listing.cached is False
    assert listing.items == ROWS
    assert loader.calls == 1
    assert cache.set_calls == [(KEY, 60)]
    assert json.loads(await cache.get(KEY)) == ROWS
    assert sample(metrics, "cache_misses_total") == 1


@pytest.mark.asyncio
async def test_hit_skips_the_loader(listing_cache, metrics):
    loader = CountingLoader()
    first = await listing_cache.get_or_load(loader)

    second = await listing_cache.get_or_load(loader)

    assert second.cached is True
    assert second.items == first.items
    assert loader.calls == 1
    assert sample(metrics, "cache_hits_total") == 1


@pytest.mark.asyncio
async def test_entry_expires_after_ttl(listing_cache, clock):
    loader = CountingLoader()
    await listing_cache.get_or_load(loader)

    clock.advance(59)
    assert (await listing_cache.get_or_load(loader)).cached is True

    clock.advance(2)
    listing = await listing_cache.get_or_load(loader)
    assert listing.cached is False
    assert loader.calls == 2


@pytest.mark.asyncio
async def test_invalidate_forces_reload(listing_cache, cache):
    loader = CountingLoader()
    await listing_cache.get_or_load(loader)

    await listing_cache.invalidate()

    assert not cache.contains(KEY)
    assert (await listing_cache.get_or_load(loader)).cached is False
    assert loader.calls == 2


@pytest.mark.asyncio
async def test_invalidate_absent_key_is_noop(listing_cache, cache):
    await listing_cache.invalidate()
    await listing_cache.invalidate()
    assert cache.delete_calls == [KEY, KEY]


@pytest.mark.asyncio
async def test_store_failure_propagates_without_populating(listing_cache, cache):
    loader = CountingLoader(error=DependencyError("store down"))

    with pytest.raises(DependencyError):
        await listing_cache.get_or_load(loader)

    assert cache.set_calls == []


@pytest.mark.asyncio
async def test_cache_write_failure_still_returns_listing(listing_cache, cache):
    cache.fail_writes = True

    listing = await listing_cache.get_or_load(CountingLoader())

    assert listing.cached is False
    assert listing.items == ROWS


@pytest.mark.asyncio
async def test_cache_read_failure_degrades_to_store(listing_cache, cache, metrics):
    cache.fail_reads = True
    loader = CountingLoader()

    listing = await listing_cache.get_or_load(loader)

    assert listing.cached is False
    assert listing.items == ROWS
    assert loader.calls == 1
    assert sample(metrics, "cache_misses_total") == 1


@pytest.mark.asyncio
async def test_invalidation_failure_is_swallowed(listing_cache, cache):
    cache.fail_deletes = True
    await listing_cache.invalidate()
    assert cache.delete_calls == [KEY]


@pytest.mark.asyncio
async def test_corrupt_entry_is_treated_as_miss(listing_cache, cache):
    await cache.set_with_expiry(KEY, "{not json", 60)
    loader = CountingLoader()

    listing = await listing_cache.get_or_load(loader)

    assert listing.cached is False
    assert loader.calls == 1
