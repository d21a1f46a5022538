"""PostgreSQL implementation of Store.

Wraps a bounded asyncpg connection pool. Callers beyond ``max_size``
wait on the pool for a free connection.
"""

from collections.abc import Sequence
from typing import Any

import asyncpg

from cloud_services.config import Settings, get_settings
from cloud_services.errors import ConflictError, DependencyError
from cloud_services.logging_config import get_logger

logger = get_logger("repositories.postgres")


class PostgresStore:
    """asyncpg-backed store satisfying the Store protocol."""

    def __init__(self, pool: asyncpg.Pool) -> None:
        """Initialize the store.

        Args:
            pool: An already created asyncpg pool
        """
        self._pool = pool

    @classmethod
    async def create(cls, default_database: str, settings: Settings | None = None) -> "PostgresStore":
        """Factory method creating the pool from settings.

        Args:
            default_database: Database used when DB_NAME is not set
            settings: Settings to read. If None, uses the process settings.

        Returns:
            Connected PostgresStore
        """
        settings = settings or get_settings()
        try:
            pool = await asyncpg.create_pool(
                settings.database_dsn(default_database),
                min_size=settings.db_pool_min_size,
                max_size=settings.db_pool_max_size,
                command_timeout=settings.db_command_timeout,
            )
        except (asyncpg.PostgresError, OSError) as e:
            logger.error("postgres_connect_failed", error=str(e))
            raise DependencyError(f"Could not connect to PostgreSQL: {e}") from e

        logger.info(
            "postgres_pool_created",
            host=settings.db_host,
            database=settings.db_name or default_database,
            max_size=settings.db_pool_max_size,
        )
        return cls(pool)

    async def query(self, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        """Execute a statement and return its rows as dicts.

        Raises:
            ConflictError: On a unique constraint violation
            DependencyError: On any other database or connection failure
        """
        try:
            async with self._pool.acquire() as conn:
                records = await conn.fetch(sql, *params)
        except asyncpg.UniqueViolationError as e:
            raise ConflictError(
                "Unique constraint violated",
                details={"constraint": e.constraint_name},
            ) from e
        except (asyncpg.PostgresError, OSError) as e:
            raise DependencyError(f"PostgreSQL query failed: {e}") from e

        return [dict(record) for record in records]

    async def health_check(self) -> bool:
        """Check if PostgreSQL answers ``SELECT 1``.

        Returns:
            True if healthy, False otherwise
        """
        try:
            async with self._pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
            return True
        except (asyncpg.PostgresError, OSError) as e:
            logger.warning("postgres_health_check_failed", error=str(e))
            return False

    async def close(self) -> None:
        await self._pool.close()
        logger.info("postgres_pool_closed")

    def connection_count(self) -> int:
        """Number of connections currently open in the pool."""
        return self._pool.get_size()
