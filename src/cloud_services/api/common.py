"""Error handling and middleware shared by both service apps."""

import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cloud_services.config import Settings
from cloud_services.dto import ErrorResponse
from cloud_services.errors import ErrorKind, ServiceError
from cloud_services.logging_config import get_logger
from cloud_services.metrics import ServiceMetrics

logger = get_logger("api")

SUSPICIOUS_MARKERS = ("..", "<script>", "SELECT")

GENERIC_SERVER_ERROR = "Internal server error"

# Metrics route label for requests no route matched
UNMATCHED_ROUTE = "unmatched"


def _error(status_code: int, message: str, errors: list[dict] | None = None) -> JSONResponse:
    body = ErrorResponse(error=message, errors=errors)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def install_error_handlers(app: FastAPI, dependency_messages: dict[str, str] | None = None) -> None:
    """Map every failure to the ``{success: false, error}`` body.

    Args:
        app: Application to install the handlers on
        dependency_messages: Caller-facing message for a dependency failure,
            keyed by route name. Unlisted routes get a generic message.
    """
    dependency_messages = dependency_messages or {}

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        if exc.kind is ErrorKind.DEPENDENCY:
            logger.error(
                "dependency_failure",
                method=request.method,
                path=request.url.path,
                error=exc.message,
                cause=repr(exc.__cause__) if exc.__cause__ else None,
            )
            route_name = getattr(request.scope.get("route"), "name", None)
            return _error(exc.status_code, dependency_messages.get(route_name, GENERIC_SERVER_ERROR))
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {
                "location": ".".join(str(part) for part in err["loc"]),
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        return _error(status.HTTP_400_BAD_REQUEST, "Validation failed", errors)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return _error(exc.status_code, "Route not found")
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_error", method=request.method, path=request.url.path)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_SERVER_ERROR)


def install_middleware(app: FastAPI, settings: Settings, metrics: ServiceMetrics) -> None:
    """Install CORS and the access-log/metrics middleware."""
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=list(settings.cors_methods),
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
        max_age=86400,
    )

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        start_time = time.perf_counter()
        url = str(request.url)
        client_ip = request.headers.get("x-forwarded-for") or (
            request.client.host if request.client else "unknown"
        )
        user_agent = request.headers.get("user-agent")

        if any(marker in url for marker in SUSPICIOUS_MARKERS):
            logger.warning("suspicious_request", client_ip=client_ip, url=url)

        response = await call_next(request)

        duration = time.perf_counter() - start_time
        route = getattr(request.scope.get("route"), "path", UNMATCHED_ROUTE)
        metrics.observe_request(request.method, route, response.status_code, duration)
        logger.info(
            "request",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
            client_ip=client_ip,
            user_agent=user_agent,
        )
        return response
