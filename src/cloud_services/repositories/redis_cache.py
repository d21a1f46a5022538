"""Redis implementation of CacheStore.

Plain string values with per-key expiry (``SETEX``). It satisfies the
CacheStore protocol through structural typing.
"""

import redis.asyncio as redis
from redis.exceptions import RedisError

from cloud_services.config import Settings, get_redis_client
from cloud_services.errors import DependencyError
from cloud_services.logging_config import get_logger

logger = get_logger("repositories.redis")


class RedisCacheRepository:
    """Redis key-value cache.

    Every Redis failure is re-raised as ``DependencyError`` so services do
    not depend on the client library's exception types.
    """

    def __init__(self, redis_client: redis.Redis) -> None:
        """Initialize the Redis cache repository.

        Args:
            redis_client: asyncio Redis client instance
        """
        self._client = redis_client

    @classmethod
    def create(cls, settings: Settings | None = None) -> "RedisCacheRepository":
        """Factory method to create RedisCacheRepository from settings.

        Args:
            settings: Settings to read. If None, uses the process settings.

        Returns:
            Configured RedisCacheRepository
        """
        return cls(get_redis_client(settings))

    async def get(self, key: str) -> str | None:
        try:
            return await self._client.get(key)
        except RedisError as e:
            raise DependencyError(f"Redis GET {key} failed: {e}") from e

    async def set_with_expiry(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self._client.setex(key, ttl_seconds, value)
        except RedisError as e:
            raise DependencyError(f"Redis SETEX {key} failed: {e}") from e

    async def delete(self, key: str) -> int:
        try:
            result: int = await self._client.delete(key)
        except RedisError as e:
            raise DependencyError(f"Redis DEL {key} failed: {e}") from e
        return result

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except RedisError as e:
            logger.warning("redis_health_check_failed", error=str(e))
            return False

    async def close(self) -> None:
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
