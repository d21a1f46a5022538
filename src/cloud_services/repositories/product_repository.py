"""PostgreSQL implementation of ProductRepository."""

from cloud_services.entities import NewProduct, Product, ProductFilter, ProductPatch
from cloud_services.protocols import Store

from .query_builder import PRODUCT_COLUMNS, build_product_filter, build_product_update

PRODUCTS_SCHEMA = """
CREATE TABLE IF NOT EXISTS products (
    id SERIAL PRIMARY KEY,
    name VARCHAR(255) NOT NULL,
    description TEXT,
    price NUMERIC(10, 2) NOT NULL CHECK (price >= 0),
    stock INTEGER NOT NULL DEFAULT 0 CHECK (stock >= 0),
    category VARCHAR(100),
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
)
"""


class PostgresProductRepository:
    """Products table access through a Store."""

    def __init__(self, store: Store) -> None:
        self._store = store

    async def ensure_schema(self) -> None:
        """Create the products table if it does not exist."""
        await self._store.query(PRODUCTS_SCHEMA)

    async def search(self, filters: ProductFilter) -> list[Product]:
        query = build_product_filter(filters)
        rows = await self._store.query(query.sql, query.params)
        return [Product.from_row(row) for row in rows]

    async def list_by_category(self, category: str) -> list[Product]:
        rows = await self._store.query(
            f"SELECT {PRODUCT_COLUMNS} FROM products WHERE category = $1 ORDER BY name ASC",
            (category,),
        )
        return [Product.from_row(row) for row in rows]

    async def get_by_id(self, product_id: int) -> Product | None:
        rows = await self._store.query(
            f"SELECT {PRODUCT_COLUMNS} FROM products WHERE id = $1",
            (product_id,),
        )
        return Product.from_row(rows[0]) if rows else None

    async def create(self, product: NewProduct) -> Product:
        rows = await self._store.query(
            "INSERT INTO products (name, description, price, stock, category) "
            f"VALUES ($1, $2, $3, $4, $5) RETURNING {PRODUCT_COLUMNS}",
            (product.name, product.description, product.price, product.stock, product.category),
        )
        return Product.from_row(rows[0])

    async def update(self, product_id: int, patch: ProductPatch) -> Product | None:
        query = build_product_update(product_id, patch)
        rows = await self._store.query(query.sql, query.params)
        return Product.from_row(rows[0]) if rows else None

    async def delete(self, product_id: int) -> Product | None:
        rows = await self._store.query(
            f"DELETE FROM products WHERE id = $1 RETURNING {PRODUCT_COLUMNS}",
            (product_id,),
        )
        return Product.from_row(rows[0]) if rows else None

    async def totals(self) -> tuple[int, int]:
        rows = await self._store.query(
            "SELECT COUNT(*) AS count, COALESCE(SUM(stock), 0) AS total_stock FROM products"
        )
        return int(rows[0]["count"]), int(rows[0]["total_stock"])

    async def health_check(self) -> bool:
        return await self._store.health_check()
