"""Parameterized SQL for the products table.

User-supplied values only ever travel as bound parameters. Column names
and operators come from the fixed tables below, never from the request.
"""

from dataclasses import dataclass
from typing import Any

from cloud_services.entities import ProductFilter, ProductPatch
from cloud_services.errors import ValidationError

PRODUCT_COLUMNS = "id, name, description, price, stock, category, created_at"

# Columns a partial update may touch, in the order assignments are emitted
UPDATABLE_COLUMNS = ("name", "description", "price", "stock", "category")


@dataclass(frozen=True)
class BuiltQuery:
    """A statement and the values bound to its ``$n`` placeholders."""

    sql: str
    params: tuple[Any, ...]


class _Placeholders:
    """Hands out ``$1``, ``$2``, ... while collecting the bound values."""

    def __init__(self) -> None:
        self.values: list[Any] = []

    def bind(self, value: Any) -> str:
        self.values.append(value)
        return f"${len(self.values)}"


def build_product_filter(filters: ProductFilter) -> BuiltQuery:
    """Build the filtered product listing.

    Args:
        filters: Predicates to apply; absent ones are omitted entirely

    Returns:
        BuiltQuery ordered by id ascending
    """
    placeholders = _Placeholders()
    clauses = ["1=1"]

    if filters.category is not None:
        clauses.append(f"category = {placeholders.bind(filters.category)}")
    if filters.min_price is not None:
        clauses.append(f"price >= {placeholders.bind(filters.min_price)}")
    if filters.max_price is not None:
        clauses.append(f"price <= {placeholders.bind(filters.max_price)}")
    if filters.in_stock:
        clauses.append("stock > 0")

    sql = f"SELECT {PRODUCT_COLUMNS} FROM products WHERE {' AND '.join(clauses)} ORDER BY id ASC"
    return BuiltQuery(sql=sql, params=tuple(placeholders.values))


def build_product_update(product_id: int, patch: ProductPatch) -> BuiltQuery:
    """Build a partial UPDATE touching only the supplied fields.

    Args:
        product_id: Identifier bound as the last placeholder
        patch: Tri-state field values

    Returns:
        BuiltQuery returning the updated row

    Raises:
        ValidationError: If the patch supplies no field
    """
    provided = patch.provided()
    placeholders = _Placeholders()
    assignments = [
        f"{column} = {placeholders.bind(provided[column])}"
        for column in UPDATABLE_COLUMNS
        if column in provided
    ]

    if not assignments:
        raise ValidationError("No fields to update")

    where = placeholders.bind(product_id)
    sql = (
        f"UPDATE products SET {', '.join(assignments)} "
        f"WHERE id = {where} RETURNING {PRODUCT_COLUMNS}"
    )
    return BuiltQuery(sql=sql, params=tuple(placeholders.values))
