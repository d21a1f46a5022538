"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (PostgreSQL, Redis, in-memory fakes)
- Unit testing with fake implementations
- Clear separation of concerns
"""

from .cache_store import CacheStore
from .repositories import ProductRepository, UserRepository
from .store import Store

__all__ = [
    "CacheStore",
    "ProductRepository",
    "Store",
    "UserRepository",
]
