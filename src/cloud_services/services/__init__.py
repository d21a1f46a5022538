"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository -> Store
    (HTTP)  -> (Business) -> (Entities) -> (SQL / Redis)

Usage:
    ```python
    from cloud_services.services import UserService

    service = UserService.create(repository=repo, cache=cache, metrics=metrics)
    listing = await service.list_users()
    ```
"""

from .listing_cache import ListingCache
from .product_service import ProductService
from .user_service import UserService

__all__ = [
    "ListingCache",
    "ProductService",
    "UserService",
]
