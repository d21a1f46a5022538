"""Cache storage protocol.

Defines the interface for a key-value cache with per-key expiry.
Implementations can include Redis (default) or an in-memory fake.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for cache backends.

    Similar to Go's interface pattern - any type that implements these
    methods satisfies the protocol, no explicit inheritance needed.
    Backend failures are raised as ``DependencyError``.
    """

    async def get(self, key: str) -> str | None:
        """Fetch a value.

        Args:
            key: The cache key

        Returns:
            The stored value, or None when absent or expired
        """
        ...

    async def set_with_expiry(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value that expires after ``ttl_seconds``.

        Args:
            key: The cache key
            value: Serialized value
            ttl_seconds: Time-to-live in seconds
        """
        ...

    async def delete(self, key: str) -> int:
        """Delete a key. Deleting an absent key is a no-op.

        Args:
            key: The cache key

        Returns:
            Number of keys removed (0 or 1)
        """
        ...

    async def health_check(self) -> bool:
        """Check if the cache is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...

    async def close(self) -> None:
        """Close the underlying connection."""
        ...
