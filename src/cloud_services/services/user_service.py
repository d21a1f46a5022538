"""User service for core business logic.

This service coordinates the user repository (data access) and the
listing cache. Every committed create or delete invalidates the cached
listing before returning.
"""

from cloud_services.config import get_settings
from cloud_services.entities import CachedListing, User
from cloud_services.errors import NotFoundError
from cloud_services.logging_config import get_logger
from cloud_services.metrics import ServiceMetrics
from cloud_services.protocols import CacheStore, UserRepository

from .listing_cache import ListingCache

logger = get_logger("services.users")


class UserService:
    """User orchestration service.

    Depends on PROTOCOLS, not concrete implementations:
    - UserRepository: PostgreSQL in production, in-memory in tests
    - ListingCache over any CacheStore
    """

    def __init__(
        self,
        repository: UserRepository,
        listing_cache: ListingCache,
        metrics: ServiceMetrics,
    ) -> None:
        """Initialize the user service.

        Args:
            repository: User persistence backend (required).
            listing_cache: Read-through cache for the full listing (required).
            metrics: Operation counters (required).
        """
        self._repository = repository
        self._listing_cache = listing_cache
        self._metrics = metrics

    @classmethod
    def create(
        cls,
        repository: UserRepository,
        cache: CacheStore,
        metrics: ServiceMetrics,
        cache_key: str | None = None,
        cache_ttl: int | None = None,
    ) -> "UserService":
        """Factory method wiring the listing cache from settings.

        Args:
            repository: User persistence backend (required).
            cache: Cache backend for the listing (required).
            metrics: Operation and cache counters (required).
            cache_key: Listing key. If None, uses settings.
            cache_ttl: Listing TTL in seconds. If None, uses settings.

        Returns:
            Configured UserService instance
        """
        settings = get_settings()
        listing_cache = ListingCache(
            cache=cache,
            key=cache_key or settings.users_cache_key,
            ttl=cache_ttl or settings.users_cache_ttl,
            metrics=metrics,
            cache_type="users_list",
        )
        return cls(repository=repository, listing_cache=listing_cache, metrics=metrics)

    async def list_users(self) -> CachedListing:
        """List every user, served through the listing cache.

        Returns:
            CachedListing of user dicts ordered by id
        """
        listing = await self._listing_cache.get_or_load(self._load_listing)
        if not listing.cached:
            self._metrics.record_operation("list")
        return listing

    async def get_user(self, user_id: int) -> User:
        """Fetch one user. The listing cache is not consulted.

        Raises:
            NotFoundError: If no user has this id
        """
        user = await self._repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User with ID {user_id} not found")
        self._metrics.record_operation("get")
        return user

    async def create_user(self, name: str, email: str) -> User:
        """Create a user and invalidate the cached listing.

        Raises:
            ConflictError: If the email is already in use
        """
        user = await self._repository.create(name=name, email=email)
        await self._listing_cache.invalidate()
        self._metrics.record_operation("create")
        logger.info("user_created", user_id=user.id)
        return user

    async def delete_user(self, user_id: int) -> User:
        """Delete a user and invalidate the cached listing.

        Raises:
            NotFoundError: If no user has this id
        """
        user = await self._repository.delete(user_id)
        if user is None:
            raise NotFoundError(f"User with ID {user_id} not found")
        await self._listing_cache.invalidate()
        self._metrics.record_operation("delete")
        logger.info("user_deleted", user_id=user_id)
        return user

    async def is_healthy(self) -> bool:
        return await self._repository.health_check()

    async def _load_listing(self) -> list[dict]:
        users = await self._repository.list_all()
        return [user.to_dict() for user in users]
