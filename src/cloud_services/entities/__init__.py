"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .listing import CachedListing
from .product import UNSET, NewProduct, Product, ProductFilter, ProductPatch, Unset
from .user import User

__all__ = [
    "CachedListing",
    "NewProduct",
    "Product",
    "ProductFilter",
    "ProductPatch",
    "UNSET",
    "Unset",
    "User",
]
