"""Dependency injection configuration for the FastAPI apps.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

from typing import Annotated

from fastapi import Depends, Request

from cloud_services.handlers import ProductHandler, UserHandler


def get_user_handler(request: Request) -> UserHandler:
    """Dependency injection for UserHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "user_handler", None)
    if handler is None:
        raise RuntimeError("UserHandler not initialized. Check lifespan setup.")
    return handler


def get_product_handler(request: Request) -> ProductHandler:
    """Dependency injection for ProductHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "product_handler", None)
    if handler is None:
        raise RuntimeError("ProductHandler not initialized. Check lifespan setup.")
    return handler


# Type aliases for cleaner dependency injection
UserHandlerDep = Annotated[UserHandler, Depends(get_user_handler)]
ProductHandlerDep = Annotated[ProductHandler, Depends(get_product_handler)]
