"""Cloud services - users and products CRUD microservices.

This package provides a layered architecture shared by both services:

Layers:
    - protocols: Interface contracts (Store, CacheStore, repositories)
    - repositories: PostgreSQL / Redis implementations and the SQL builder
    - services: Business logic, including the cached user listing
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

For HTTP APIs:
    ```python
    from cloud_services.api.users_app import app as users_app
    from cloud_services.api.products_app import app as products_app
    ```
"""

from cloud_services.config import Settings, get_settings
from cloud_services.entities import UNSET, CachedListing, Product, ProductFilter, ProductPatch, User
from cloud_services.errors import (
    ConflictError,
    DependencyError,
    ErrorKind,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from cloud_services.handlers import ProductHandler, UserHandler
from cloud_services.protocols import CacheStore, ProductRepository, Store, UserRepository
from cloud_services.repositories import (
    PostgresProductRepository,
    PostgresStore,
    PostgresUserRepository,
    RedisCacheRepository,
)
from cloud_services.services import ListingCache, ProductService, UserService

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    # Errors
    "ErrorKind",
    "ServiceError",
    "ValidationError",
    "ConflictError",
    "NotFoundError",
    "DependencyError",
    # Protocols (interfaces)
    "Store",
    "CacheStore",
    "UserRepository",
    "ProductRepository",
    # Services (business logic)
    "ListingCache",
    "UserService",
    "ProductService",
    # Handlers (HTTP)
    "UserHandler",
    "ProductHandler",
    # Repositories (data access)
    "PostgresStore",
    "RedisCacheRepository",
    "PostgresUserRepository",
    "PostgresProductRepository",
    # Entities (domain models)
    "User",
    "Product",
    "ProductFilter",
    "ProductPatch",
    "CachedListing",
    "UNSET",
]
