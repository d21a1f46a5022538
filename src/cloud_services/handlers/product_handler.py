"""HTTP handlers for product operations."""

from cloud_services.dto import (
    CreateProductRequest,
    ProductCategoryResponse,
    ProductItem,
    ProductListResponse,
    ProductResponse,
    UpdateProductRequest,
)
from cloud_services.entities import ProductFilter
from cloud_services.services import ProductService


class ProductHandler:
    """HTTP handlers for the products service."""

    def __init__(self, product_service: ProductService) -> None:
        """Initialize the product handler.

        Args:
            product_service: The product service for business logic (required).
        """
        self._products = product_service

    async def list_products(self, filters: ProductFilter) -> ProductListResponse:
        """Handle GET /products requests."""
        products = await self._products.list_products(filters)
        return ProductListResponse(
            count=len(products),
            data=[ProductItem.from_entity(p) for p in products],
        )

    async def list_by_category(self, category: str) -> ProductCategoryResponse:
        """Handle GET /products/category/{category} requests."""
        products = await self._products.list_by_category(category)
        return ProductCategoryResponse(
            category=category,
            count=len(products),
            data=[ProductItem.from_entity(p) for p in products],
        )

    async def get_product(self, product_id: int) -> ProductResponse:
        product = await self._products.get_product(product_id)
        return ProductResponse(data=ProductItem.from_entity(product))

    async def create_product(self, request: CreateProductRequest) -> ProductResponse:
        product = await self._products.create_product(request.to_entity())
        return ProductResponse(
            message="Product created successfully",
            data=ProductItem.from_entity(product),
        )

    async def update_product(self, product_id: int, request: UpdateProductRequest) -> ProductResponse:
        """Handle PUT /products/{id} requests.

        Only keys present in the JSON body reach the update.
        """
        product = await self._products.update_product(product_id, request.to_patch())
        return ProductResponse(
            message="Product updated successfully",
            data=ProductItem.from_entity(product),
        )

    async def delete_product(self, product_id: int) -> ProductResponse:
        product = await self._products.delete_product(product_id)
        return ProductResponse(
            message="Product deleted successfully",
            data=ProductItem.from_entity(product),
        )
