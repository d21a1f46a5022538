"""
Tests for the products SQL builder.
"""

import itertools
import re
from decimal import Decimal

import pytest

from cloud_services.entities import UNSET, ProductFilter, ProductPatch
from cloud_services.errors import ValidationError
from cloud_services.repositories import build_product_filter, build_product_update

PLACEHOLDER = re.compile(r"\$(\d+)")

FILTER_VALUES = {
    "category": "tools",
    "min_price": Decimal("5"),
    "max_price": Decimal("20"),
    "in_stock": True,
}

PREDICATES = {
    "category": "category = $",
    "min_price": "price >= $",
    "max_price": "price <= $",
    "in_stock": "stock > 0",
}


def placeholder_numbers(sql):
    return [int(n) for n in PLACEHOLDER.findall(sql)]


def test_filter_without_predicates():
    """No filter keeps the always-true base predicate only."""
    query = build_product_filter(ProductFilter())
    assert query.sql.endswith("WHERE 1=1 ORDER BY id ASC")
    assert query.params == ()


@pytest.mark.parametrize(
    "subset",
    [
        combo
        for size in range(len(FILTER_VALUES) + 1)
        for combo in itertools.combinations(FILTER_VALUES, size)
    ],
)
def test_filter_applies_exactly_the_supplied_predicates(subset):
    """Every supplied predicate appears, every omitted one does not."""
    query = build_product_filter(ProductFilter(**{name: FILTER_VALUES[name] for name in subset}))

    for name, fragment in PREDICATES.items():
        assert (fragment in query.sql) == (name in subset)

    numbers = placeholder_numbers(query.sql)
    assert numbers == list(range(1, len(query.params) + 1))
    assert len(query.params) == len([name for name in subset if name != "in_stock"])


def test_filter_binds_values_in_append_order():
    query = build_product_filter(
        ProductFilter(category="books", min_price=Decimal("1.5"), max_price=Decimal("9"), in_stock=True)
    )
    assert "category = $1 AND price >= $2 AND price <= $3 AND stock > 0" in query.sql
    assert query.params == ("books", Decimal("1.5"), Decimal("9"))


def test_filter_never_interpolates_values():
    hostile = "x'; DROP TABLE products; --"
    query = build_product_filter(ProductFilter(category=hostile))
    assert hostile not in query.sql
    assert query.params == (hostile,)


def test_zero_min_price_is_still_applied():
    query = build_product_filter(ProductFilter(min_price=Decimal("0")))
    assert "price >= $1" in query.sql
    assert query.params == (Decimal("0"),)


def test_update_only_supplied_fields():
    query = build_product_update(7, ProductPatch(stock=5))
    assert query.sql.startswith("UPDATE products SET stock = $1 WHERE id = $2 RETURNING")
    assert query.params == (5, 7)


def test_update_keeps_column_order_and_id_last():
    patch = ProductPatch(category="garden", name="Rake", price=Decimal("12.50"))
    query = build_product_update(3, patch)
    assert "SET name = $1, price = $2, category = $3 WHERE id = $4" in query.sql
    assert query.params == ("Rake", Decimal("12.50"), "garden", 3)


def test_update_distinguishes_null_from_absent():
    """An explicit None is assigned, an UNSET field is left out."""
    query = build_product_update(1, ProductPatch(description=None, category=UNSET))
    assert "description = $1" in query.sql
    assert "category" not in query.sql.split("RETURNING")[0]
    assert query.params == (None, 1)


def test_update_without_fields_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        build_product_update(1, ProductPatch())
    assert exc_info.value.message == "No fields to update"
