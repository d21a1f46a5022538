"""Product domain entities."""

from dataclasses import dataclass, fields
from datetime import datetime
from decimal import Decimal
from typing import Any, Final


class Unset:
    """Marker type for a field that was not supplied at all.

    ``None`` means "set the column to NULL"; ``UNSET`` means "leave it alone".
    """

    _instance: "Unset | None" = None

    def __new__(cls) -> "Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Final = Unset()


@dataclass(frozen=True)
class Product:
    """A product row as stored in the ``products`` table."""

    id: int
    name: str
    price: Decimal
    stock: int = 0
    description: str | None = None
    category: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Product":
        return cls(
            id=row["id"],
            name=row["name"],
            price=Decimal(str(row["price"])),
            stock=row["stock"],
            description=row.get("description"),
            category=row.get("category"),
            created_at=row.get("created_at"),
        )


@dataclass(frozen=True)
class NewProduct:
    """Values for a product that does not exist yet."""

    name: str
    price: Decimal
    stock: int = 0
    description: str | None = None
    category: str | None = None


@dataclass(frozen=True)
class ProductFilter:
    """Optional predicates for the product listing.

    Attributes:
        category: Exact category match
        min_price: Inclusive lower price bound
        max_price: Inclusive upper price bound
        in_stock: Only products with stock > 0 when True
    """

    category: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    in_stock: bool = False


@dataclass(frozen=True)
class ProductPatch:
    """Partial update of a product.

    Each field is tri-state: ``UNSET`` (absent), ``None`` (present-null)
    or a value (present-value).
    """

    name: str | None | Unset = UNSET
    description: str | None | Unset = UNSET
    price: Decimal | None | Unset = UNSET
    stock: int | None | Unset = UNSET
    category: str | None | Unset = UNSET

    def provided(self) -> dict[str, Any]:
        """Return the supplied fields, in declaration order."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }
