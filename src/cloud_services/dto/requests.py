"""Request DTOs for API endpoints."""

import re
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from cloud_services.entities import NewProduct, ProductPatch

# Column limits of the products table
MAX_INT32 = 2_147_483_647
PRICE_DIGITS = 10
PRICE_DECIMALS = 2

NAME_PATTERN = re.compile(r"^[a-zA-ZÀ-ÿ\s'-]+$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class CreateUserRequest(BaseModel):
    """Request DTO for creating a user.

    The name and email are trimmed; the email is lower-cased.
    """

    name: str = Field(..., description="Display name (letters, spaces, apostrophes, hyphens)")
    email: str = Field(..., description="Unique email address")

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if not 2 <= len(value) <= 100:
            raise ValueError("Name must be between 2 and 100 characters")
        if not NAME_PATTERN.match(value):
            raise ValueError("Name may only contain letters, spaces, apostrophes and hyphens")
        return value

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        value = value.strip().lower()
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Invalid email")
        if len(value) > 255:
            raise ValueError("Email too long")
        return value


class CreateProductRequest(BaseModel):
    """Request DTO for creating a product.

    Upper bounds follow the column types. Sign checks on price and stock
    happen in the service layer.
    """

    name: str = Field(..., description="Product name", min_length=1, max_length=255)
    price: Decimal = Field(
        ..., description="Unit price", max_digits=PRICE_DIGITS, decimal_places=PRICE_DECIMALS
    )
    description: str | None = Field(None, description="Free-text description")
    stock: int | None = Field(None, description="Units in stock (defaults to 0)", le=MAX_INT32)
    category: str | None = Field(None, description="Category name", max_length=100)

    def to_entity(self) -> NewProduct:
        return NewProduct(
            name=self.name,
            price=self.price,
            stock=self.stock or 0,
            description=self.description or None,
            category=self.category or None,
        )


class UpdateProductRequest(BaseModel):
    """Request DTO for a partial product update.

    Only keys present in the body are applied. An explicit ``null`` clears a
    nullable column; a missing key leaves the column untouched.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    price: Decimal | None = Field(None, max_digits=PRICE_DIGITS, decimal_places=PRICE_DECIMALS)
    stock: int | None = Field(None, le=MAX_INT32)
    category: str | None = Field(None, max_length=100)

    def to_patch(self) -> ProductPatch:
        return ProductPatch(**{name: getattr(self, name) for name in self.model_fields_set})
