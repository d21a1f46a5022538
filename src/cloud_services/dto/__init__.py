"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import CreateProductRequest, CreateUserRequest, UpdateProductRequest
from .responses import (
    ErrorResponse,
    HealthCheckResponse,
    ProductCategoryResponse,
    ProductItem,
    ProductListResponse,
    ProductResponse,
    UserItem,
    UserListResponse,
    UserResponse,
)

__all__ = [
    "CreateUserRequest",
    "CreateProductRequest",
    "UpdateProductRequest",
    "UserItem",
    "UserListResponse",
    "UserResponse",
    "ProductItem",
    "ProductListResponse",
    "ProductCategoryResponse",
    "ProductResponse",
    "ErrorResponse",
    "HealthCheckResponse",
]
