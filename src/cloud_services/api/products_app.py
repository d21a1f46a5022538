"""Products service: CRUD over the ``products`` table with listing filters."""

import socket
from contextlib import asynccontextmanager
from decimal import Decimal
from typing import Any

from fastapi import FastAPI, Path, Query, status
from fastapi.responses import JSONResponse

from cloud_services.api.common import install_error_handlers, install_middleware
from cloud_services.api.dependencies import ProductHandlerDep
from cloud_services.config import Settings, get_settings
from cloud_services.dto import (
    CreateProductRequest,
    HealthCheckResponse,
    ProductCategoryResponse,
    ProductListResponse,
    ProductResponse,
    UpdateProductRequest,
)
from cloud_services.entities import ProductFilter
from cloud_services.handlers import ProductHandler
from cloud_services.logging_config import configure_logging, get_logger
from cloud_services.metrics import ProductMetrics
from cloud_services.protocols import ProductRepository
from cloud_services.repositories import PostgresProductRepository, PostgresStore
from cloud_services.services import ProductService

logger = get_logger("api.products")

SERVICE_NAME = "products-service"
DEFAULT_DATABASE = "productsdb"
DEFAULT_PORT = 3001

# Answer to a dependency failure, per route
DEPENDENCY_MESSAGES = {
    "list_products": "Server error while fetching products",
    "list_by_category": "Server error while fetching products by category",
    "get_product": "Server error while fetching the product",
    "create_product": "Server error while creating the product",
    "update_product": "Server error while updating the product",
    "delete_product": "Server error while deleting the product",
}


def create_app(
    settings: Settings | None = None,
    repository: ProductRepository | None = None,
    metrics: ProductMetrics | None = None,
) -> FastAPI:
    """Build the products service app.

    Args:
        settings: Service settings. If None, uses the process settings.
        repository: Product persistence backend. Created from settings at
            startup (and closed at shutdown) when omitted.
        metrics: Counters and gauges. A fresh registry is used when omitted.

    Returns:
        The FastAPI application
    """
    settings = settings or get_settings()
    metrics = metrics or ProductMetrics()
    service_name = settings.service_name or SERVICE_NAME
    configure_logging(service_name, settings.log_level, settings.log_json)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize all layers and store them in app.state."""
        store: PostgresStore | None = None

        product_repository = repository
        if product_repository is None:
            store = await PostgresStore.create(DEFAULT_DATABASE, settings)
            metrics.track_db_connections(store.connection_count)
            product_repository = PostgresProductRepository(store)
            if settings.db_auto_migrate:
                await product_repository.ensure_schema()

        product_service = ProductService(repository=product_repository, metrics=metrics)
        app.state.product_service = product_service
        app.state.product_handler = ProductHandler(product_service=product_service)
        await product_service.refresh_totals()

        logger.info("service_started", instance=settings.instance_id)

        yield

        del app.state.product_handler
        del app.state.product_service
        if store is not None:
            await store.close()
        logger.info("service_stopped")

    app = FastAPI(
        title="Products API",
        description="Products microservice with filtered listings and partial updates",
        version="1.0.0",
        lifespan=lifespan,
    )
    install_error_handlers(app, DEPENDENCY_MESSAGES)
    install_middleware(app, settings, metrics)

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "message": "Products API - Cloud-native microservice",
            "version": "1.0.0",
            "endpoints": {
                "GET /products": "List products (filters: category, minPrice, maxPrice, inStock)",
                "GET /products/{id}": "Get a product by id",
                "GET /products/category/{category}": "List products of a category",
                "POST /products": "Create a product",
                "PUT /products/{id}": "Update some fields of a product",
                "DELETE /products/{id}": "Delete a product",
                "GET /health": "Health check",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health() -> JSONResponse:
        """Health check endpoint."""
        database_ok = await app.state.product_service.is_healthy()
        body = HealthCheckResponse(
            status="healthy" if database_ok else "unhealthy",
            database="connected" if database_ok else "disconnected",
            instance=settings.instance_id,
            hostname=socket.gethostname(),
        )
        return JSONResponse(
            status_code=status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
            content=body.model_dump(),
        )

    @app.get("/products", response_model=ProductListResponse)
    async def list_products(
        handler: ProductHandlerDep,
        category: str | None = Query(None, description="Exact category match"),
        min_price: Decimal | None = Query(None, alias="minPrice", description="Inclusive lower bound"),
        max_price: Decimal | None = Query(None, alias="maxPrice", description="Inclusive upper bound"),
        in_stock: bool = Query(False, alias="inStock", description="Only products with stock > 0"),
    ) -> ProductListResponse:
        """List products; each filter applies only when supplied."""
        filters = ProductFilter(
            category=category or None,
            min_price=min_price,
            max_price=max_price,
            in_stock=in_stock,
        )
        return await handler.list_products(filters)

    @app.get("/products/category/{category}", response_model=ProductCategoryResponse)
    async def list_by_category(category: str, handler: ProductHandlerDep) -> ProductCategoryResponse:
        return await handler.list_by_category(category)

    @app.get("/products/{product_id}", response_model=ProductResponse)
    async def get_product(handler: ProductHandlerDep, product_id: int = Path(..., ge=1)) -> ProductResponse:
        return await handler.get_product(product_id)

    @app.post("/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
    async def create_product(request: CreateProductRequest, handler: ProductHandlerDep) -> ProductResponse:
        return await handler.create_product(request)

    @app.put("/products/{product_id}", response_model=ProductResponse)
    async def update_product(
        request: UpdateProductRequest,
        handler: ProductHandlerDep,
        product_id: int = Path(..., ge=1),
    ) -> ProductResponse:
        """Partial update: only the keys present in the body are changed."""
        return await handler.update_product(product_id, request)

    @app.delete("/products/{product_id}", response_model=ProductResponse)
    async def delete_product(handler: ProductHandlerDep, product_id: int = Path(..., ge=1)) -> ProductResponse:
        return await handler.delete_product(product_id)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "cloud_services.api.products_app:app",
        host=_settings.api_host,
        port=_settings.api_port or DEFAULT_PORT,
        reload=_settings.api_reload,
    )
