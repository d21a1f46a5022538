"""Read-through cache for a full entity listing.

Only the aggregate listing is cached, under one fixed key. There are no
per-entity entries.
"""

import json
from collections.abc import Awaitable, Callable
from typing import Any

from cloud_services.entities import CachedListing
from cloud_services.errors import DependencyError
from cloud_services.logging_config import get_logger
from cloud_services.metrics import ServiceMetrics
from cloud_services.protocols import CacheStore

logger = get_logger("services.listing_cache")

ListingLoader = Callable[[], Awaitable[list[dict[str, Any]]]]


class ListingCache:
    """Cache-aside orchestration for the "list all" query.

    Read path:
    1. Look the key up in the cache
    2. Hit: deserialize and return, the store is not queried
    3. Miss: load from the store, populate with the TTL, return

    Cache failures never fail a read. A failed lookup is treated as a miss
    and a failed population is dropped. Store failures propagate.

    Example:
        ```python
        listing_cache = ListingCache(cache=RedisCacheRepository.create(), key="users:all", ttl=60)
        listing = await listing_cache.get_or_load(load_users)
        await listing_cache.invalidate()
        ```
    """

    def __init__(
        self,
        cache: CacheStore,
        key: str,
        ttl: int,
        metrics: ServiceMetrics | None = None,
        cache_type: str = "listing",
    ) -> None:
        """Initialize the listing cache.

        Args:
            cache: Key-value cache backend (required).
            key: Fixed key holding the serialized listing.
            ttl: Time-to-live of the cached listing in seconds.
            metrics: Hit/miss counters. Optional.
            cache_type: Label used for the hit/miss counters.
        """
        self._cache = cache
        self._key = key
        self._ttl = ttl
        self._metrics = metrics
        self._cache_type = cache_type

    async def get_or_load(self, loader: ListingLoader) -> CachedListing:
        """Return the listing from the cache, or from ``loader`` on a miss.

        Args:
            loader: Coroutine function returning the store listing as JSON-ready rows

        Returns:
            CachedListing tagged with where it came from

        Raises:
            DependencyError: If the loader (store) fails
        """
        cached = await self._lookup()
        if cached is not None:
            logger.info("cache_hit", key=self._key, count=len(cached))
            if self._metrics:
                self._metrics.record_cache_hit(self._cache_type)
            return CachedListing(items=cached, cached=True)

        logger.info("cache_miss", key=self._key)
        if self._metrics:
            self._metrics.record_cache_miss(self._cache_type)

        items = await loader()
        await self._populate(items)
        return CachedListing(items=items, cached=False)

    async def invalidate(self) -> None:
        """Delete the cached listing.

        Call after every committed create or delete. Deleting an absent key is a
        no-op. A cache failure is logged and dropped: the write has already
        committed and the stale entry expires with its TTL.
        """
        try:
            removed = await self._cache.delete(self._key)
        except DependencyError as e:
            logger.error("cache_invalidation_failed", key=self._key, error=e.message)
            return
        logger.info("cache_invalidated", key=self._key, removed=removed)

    async def _lookup(self) -> list[dict[str, Any]] | None:
        try:
            raw = await self._cache.get(self._key)
        except DependencyError as e:
            logger.warning("cache_read_failed", key=self._key, error=e.message)
            return None

        if raw is None:
            return None

        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("cache_entry_corrupt", key=self._key)
            return None

    async def _populate(self, items: list[dict[str, Any]]) -> None:
        try:
            await self._cache.set_with_expiry(self._key, json.dumps(items), self._ttl)
        except DependencyError as e:
            logger.warning("cache_write_failed", key=self._key, error=e.message)
            return
        logger.info("cache_populated", key=self._key, ttl=self._ttl, count=len(items))
