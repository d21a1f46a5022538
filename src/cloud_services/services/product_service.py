"""Product service for core business logic.

Products have no cache layer; every read goes to the repository.
"""

from decimal import Decimal

from cloud_services.entities import NewProduct, Product, ProductFilter, ProductPatch
from cloud_services.errors import DependencyError, NotFoundError, ValidationError
from cloud_services.logging_config import get_logger
from cloud_services.metrics import ProductMetrics
from cloud_services.protocols import ProductRepository

logger = get_logger("services.products")

# Columns declared NOT NULL in the products table
REQUIRED_FIELDS = ("name", "price", "stock")


def _check_non_negative(price: Decimal | None, stock: int | None) -> None:
    if price is not None and price < 0:
        raise ValidationError("Price cannot be negative", details={"field": "price"})
    if stock is not None and stock < 0:
        raise ValidationError("Stock cannot be negative", details={"field": "stock"})


class ProductService:
    """Product orchestration service."""

    def __init__(self, repository: ProductRepository, metrics: ProductMetrics) -> None:
        """Initialize the product service.

        Args:
            repository: Product persistence backend (required).
            metrics: Operation counters and catalog gauges (required).
        """
        self._repository = repository
        self._metrics = metrics

    async def list_products(self, filters: ProductFilter) -> list[Product]:
        """List products matching every supplied filter, ordered by id."""
        products = await self._repository.search(filters)
        self._metrics.record_operation("list")
        return products

    async def list_by_category(self, category: str) -> list[Product]:
        products = await self._repository.list_by_category(category)
        self._metrics.record_operation("list_by_category")
        return products

    async def get_product(self, product_id: int) -> Product:
        """Fetch one product.

        Raises:
            NotFoundError: If no product has this id
        """
        product = await self._repository.get_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product with ID {product_id} not found")
        self._metrics.record_operation("get")
        return product

    async def create_product(self, product: NewProduct) -> Product:
        """Create a product.

        Raises:
            ValidationError: If price or stock is negative
        """
        _check_non_negative(product.price, product.stock)
        created = await self._repository.create(product)
        self._metrics.record_operation("create")
        await self.refresh_totals()
        logger.info("product_created", product_id=created.id)
        return created

    async def update_product(self, product_id: int, patch: ProductPatch) -> Product:
        """Apply a partial update; omitted fields keep their stored value.

        Business logic:
        1. Reject an empty patch before touching the store
        2. Reject null on non-nullable columns and negative numbers
        3. Delegate the update to the repository

        Raises:
            ValidationError: If the patch is empty or holds an invalid value
            NotFoundError: If no product has this id
        """
        provided = patch.provided()
        if not provided:
            raise ValidationError("No fields to update")

        for name in REQUIRED_FIELDS:
            if name in provided and provided[name] is None:
                raise ValidationError(f"Field '{name}' cannot be null", details={"field": name})

        _check_non_negative(provided.get("price"), provided.get("stock"))

        product = await self._repository.update(product_id, patch)
        if product is None:
            raise NotFoundError(f"Product with ID {product_id} not found")
        self._metrics.record_operation("update")
        await self.refresh_totals()
        logger.info("product_updated", product_id=product_id, fields=sorted(provided))
        return product

    async def delete_product(self, product_id: int) -> Product:
        """Delete a product.

        Raises:
            NotFoundError: If no product has this id
        """
        product = await self._repository.delete(product_id)
        if product is None:
            raise NotFoundError(f"Product with ID {product_id} not found")
        self._metrics.record_operation("delete")
        await self.refresh_totals()
        logger.info("product_deleted", product_id=product_id)
        return product

    async def is_healthy(self) -> bool:
        return await self._repository.health_check()

    async def refresh_totals(self) -> None:
        """Update the product count and total stock gauges.

        A store failure leaves the previous values in place.
        """
        try:
            count, total_stock = await self._repository.totals()
        except DependencyError as e:
            logger.warning("catalog_totals_failed", error=e.message)
            return
        self._metrics.set_catalog_totals(count, total_stock)
