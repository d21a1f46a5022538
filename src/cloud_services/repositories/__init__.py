"""Repository layer for data access.

This layer wraps external dependencies (PostgreSQL, Redis) behind the
protocol interfaces in ``cloud_services.protocols``. Any class
implementing the required methods satisfies the protocol; the ones here
are the production implementations.
"""

from .postgres_store import PostgresStore
from .product_repository import PostgresProductRepository
from .query_builder import BuiltQuery, build_product_filter, build_product_update
from .redis_cache import RedisCacheRepository
from .user_repository import PostgresUserRepository

__all__ = [
    "BuiltQuery",
    "PostgresProductRepository",
    "PostgresStore",
    "PostgresUserRepository",
    "RedisCacheRepository",
    "build_product_filter",
    "build_product_update",
]
