"""Relational store protocol.

Defines the contract of the persistent store adapter: parameterized
queries with positional ``$n`` placeholders, rows returned as dicts.
"""

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Store(Protocol):
    """Protocol for relational store backends.

    Implementations translate backend failures into ``ConflictError``
    (uniqueness violations) or ``DependencyError`` (everything else).
    """

    async def query(self, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        """Execute a parameterized statement.

        Args:
            sql: Statement using ``$1``..``$n`` placeholders
            params: Values bound to the placeholders, in order

        Returns:
            Returned rows (empty for statements without RETURNING)
        """
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...

    async def close(self) -> None:
        """Release pooled connections."""
        ...
