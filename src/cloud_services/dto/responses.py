"""Response DTOs for API endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from cloud_services.entities import Product, User


class UserItem(BaseModel):
    """Single user (in data arrays and single-record responses)."""

    id: int = Field(..., description="Surrogate key")
    name: str
    email: str
    created_at: datetime | None = Field(None, description="Creation time")

    @classmethod
    def from_entity(cls, user: User) -> "UserItem":
        return cls(id=user.id, name=user.name, email=user.email, created_at=user.created_at)


class UserListResponse(BaseModel):
    """Response DTO for the user listing."""

    success: bool = True
    count: int = Field(..., ge=0)
    data: list[UserItem]
    cached: bool = Field(..., description="Whether the listing was served from the cache")
    instance: str = Field(..., description="Instance that served the request")


class UserResponse(BaseModel):
    """Response DTO for single-user operations."""

    success: bool = True
    message: str | None = None
    data: UserItem


class ProductItem(BaseModel):
    """Single product."""

    id: int
    name: str
    description: str | None = None
    price: float = Field(..., ge=0.0)
    stock: int = Field(..., ge=0)
    category: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, product: Product) -> "ProductItem":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=float(product.price),
            stock=product.stock,
            category=product.category,
            created_at=product.created_at,
        )


class ProductListResponse(BaseModel):
    """Response DTO for the filtered product listing."""

    success: bool = True
    count: int = Field(..., ge=0)
    data: list[ProductItem]


class ProductCategoryResponse(BaseModel):
    """Response DTO for the per-category listing."""

    success: bool = True
    category: str
    count: int = Field(..., ge=0)
    data: list[ProductItem]


class ProductResponse(BaseModel):
    """Response DTO for single-product operations."""

    success: bool = True
    message: str | None = None
    data: ProductItem


class ErrorResponse(BaseModel):
    """Response DTO for every failed request."""

    success: bool = False
    error: str = Field(..., description="Human-readable error message")
    errors: list[dict[str, Any]] | None = Field(
        None,
        description="Per-field details for request validation failures",
    )


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    database: str = Field(..., description="'connected' or 'disconnected'")
    cache: str | None = Field(None, description="'connected', 'disconnected' or None without cache")
    instance: str
    hostname: str
