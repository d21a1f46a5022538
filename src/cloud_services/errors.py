"""Error taxonomy shared by services and HTTP handlers.

Services raise a ``ServiceError`` carrying a kind and a caller-facing message.
The API layer maps the kind to an HTTP status through ``ERROR_STATUS`` and
nothing else, so the same failure always yields the same status code.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Kinds of failure a service operation can report."""

    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    DEPENDENCY = "dependency"


ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.CONFLICT: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.DEPENDENCY: 500,
}


class ServiceError(Exception):
    """Base exception for service operations."""

    kind: ErrorKind = ErrorKind.DEPENDENCY

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return ERROR_STATUS[self.kind]


class ValidationError(ServiceError):
    """Malformed, missing or out-of-range input."""

    kind = ErrorKind.VALIDATION


class ConflictError(ServiceError):
    """A uniqueness constraint would be violated."""

    kind = ErrorKind.CONFLICT


class NotFoundError(ServiceError):
    """No row matched the requested identifier."""

    kind = ErrorKind.NOT_FOUND


class DependencyError(ServiceError):
    """The store or the cache failed.

    The message is internal; the API layer logs it and answers with a
    generic one.
    """

    kind = ErrorKind.DEPENDENCY
