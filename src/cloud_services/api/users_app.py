"""Users service: CRUD over the ``users`` table with a cached listing."""

import socket
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Path, status
from fastapi.responses import JSONResponse

from cloud_services.api.common import install_error_handlers, install_middleware
from cloud_services.api.dependencies import UserHandlerDep
from cloud_services.config import Settings, get_settings
from cloud_services.dto import CreateUserRequest, HealthCheckResponse, UserListResponse, UserResponse
from cloud_services.handlers import UserHandler
from cloud_services.logging_config import configure_logging, get_logger
from cloud_services.metrics import ServiceMetrics
from cloud_services.protocols import CacheStore, UserRepository
from cloud_services.repositories import PostgresStore, PostgresUserRepository, RedisCacheRepository
from cloud_services.services import UserService

logger = get_logger("api.users")

SERVICE_NAME = "users-service"
DEFAULT_DATABASE = "usersdb"
DEFAULT_PORT = 3000

# Answer to a dependency failure, per route
DEPENDENCY_MESSAGES = {
    "list_users": "Server error while fetching users",
    "get_user": "Server error while fetching the user",
    "create_user": "Server error while creating the user",
    "delete_user": "Server error while deleting the user",
}


def create_app(
    settings: Settings | None = None,
    repository: UserRepository | None = None,
    cache: CacheStore | None = None,
    metrics: ServiceMetrics | None = None,
) -> FastAPI:
    """Build the users service app.

    Collaborators left as None are created from settings at startup
    (asyncpg pool, Redis client) and closed at shutdown. Injected ones are
    used as-is and left open.

    Args:
        settings: Service settings. If None, uses the process settings.
        repository: User persistence backend.
        cache: Cache backend for the listing.
        metrics: Counters and gauges. A fresh registry is used when omitted.

    Returns:
        The FastAPI application
    """
    settings = settings or get_settings()
    metrics = metrics or ServiceMetrics(entity="user")
    service_name = settings.service_name or SERVICE_NAME
    configure_logging(service_name, settings.log_level, settings.log_json)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize all layers and store them in app.state."""
        owned: list[Any] = []

        user_repository = repository
        if user_repository is None:
            store = await PostgresStore.create(DEFAULT_DATABASE, settings)
            owned.append(store)
            metrics.track_db_connections(store.connection_count)
            user_repository = PostgresUserRepository(store)
            if settings.db_auto_migrate:
                await user_repository.ensure_schema()

        cache_store = cache
        if cache_store is None:
            cache_store = RedisCacheRepository.create(settings)
            owned.append(cache_store)

        user_service = UserService.create(
            repository=user_repository,
            cache=cache_store,
            metrics=metrics,
            cache_key=settings.users_cache_key,
            cache_ttl=settings.users_cache_ttl,
        )

        app.state.user_service = user_service
        app.state.user_handler = UserHandler(user_service=user_service, instance_id=settings.instance_id)
        app.state.cache = cache_store

        logger.info(
            "service_started",
            instance=settings.instance_id,
            cache_key=settings.users_cache_key,
            cache_ttl=settings.users_cache_ttl,
        )

        yield

        del app.state.user_handler
        del app.state.user_service
        del app.state.cache
        for resource in owned:
            await resource.close()
        logger.info("service_stopped")

    app = FastAPI(
        title="Users API",
        description="Users microservice with a Redis-cached listing",
        version="1.0.0",
        lifespan=lifespan,
    )
    install_error_handlers(app, DEPENDENCY_MESSAGES)
    install_middleware(app, settings, metrics)

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "message": "Users API - Cloud-native microservice",
            "version": "1.0.0",
            "instance": settings.instance_id,
            "hostname": socket.gethostname(),
            "endpoints": {
                "GET /users": "List all users",
                "GET /users/{id}": "Get a user by id",
                "POST /users": "Create a user (body: {name, email})",
                "DELETE /users/{id}": "Delete a user",
                "GET /health": "Health check",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health() -> JSONResponse:
        """Health check endpoint. The cache is reported but not required."""
        database_ok = await app.state.user_service.is_healthy()
        cache_ok = await app.state.cache.health_check()
        body = HealthCheckResponse(
            status="healthy" if database_ok else "unhealthy",
            database="connected" if database_ok else "disconnected",
            cache="connected" if cache_ok else "disconnected",
            instance=settings.instance_id,
            hostname=socket.gethostname(),
        )
        return JSONResponse(
            status_code=status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
            content=body.model_dump(),
        )

    @app.get("/users", response_model=UserListResponse)
    async def list_users(handler: UserHandlerDep) -> UserListResponse:
        """List every user (read-through cache, 60 s TTL)."""
        return await handler.list_users()

    @app.get("/users/{user_id}", response_model=UserResponse)
    async def get_user(handler: UserHandlerDep, user_id: int = Path(..., ge=1)) -> UserResponse:
        return await handler.get_user(user_id)

    @app.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
    async def create_user(request: CreateUserRequest, handler: UserHandlerDep) -> UserResponse:
        """Create a user and invalidate the cached listing."""
        return await handler.create_user(request)

    @app.delete("/users/{user_id}", response_model=UserResponse)
    async def delete_user(handler: UserHandlerDep, user_id: int = Path(..., ge=1)) -> UserResponse:
        """Delete a user and invalidate the cached listing."""
        return await handler.delete_user(user_id)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "cloud_services.api.users_app:app",
        host=_settings.api_host,
        port=_settings.api_port or DEFAULT_PORT,
        reload=_settings.api_reload,
    )
