"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .product_handler import ProductHandler
from .user_handler import UserHandler

__all__ = [
    "ProductHandler",
    "UserHandler",
]
