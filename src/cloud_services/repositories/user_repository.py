"""PostgreSQL implementation of UserRepository."""

from cloud_services.entities import User
from cloud_services.errors import ConflictError
from cloud_services.protocols import Store

USER_COLUMNS = "id, name, email, created_at"

USERS_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id SERIAL PRIMARY KEY,
    name VARCHAR(100) NOT NULL,
    email VARCHAR(255) NOT NULL UNIQUE,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
)
"""


class PostgresUserRepository:
    """Users table access through a Store."""

    def __init__(self, store: Store) -> None:
        self._store = store

    async def ensure_schema(self) -> None:
        """Create the users table if it does not exist."""
        await self._store.query(USERS_SCHEMA)

    async def list_all(self) -> list[User]:
        rows = await self._store.query(f"SELECT {USER_COLUMNS} FROM users ORDER BY id ASC")
        return [User.from_row(row) for row in rows]

    async def get_by_id(self, user_id: int) -> User | None:
        rows = await self._store.query(
            f"SELECT {USER_COLUMNS} FROM users WHERE id = $1",
            (user_id,),
        )
        return User.from_row(rows[0]) if rows else None

    async def create(self, name: str, email: str) -> User:
        try:
            rows = await self._store.query(
                f"INSERT INTO users (name, email) VALUES ($1, $2) RETURNING {USER_COLUMNS}",
                (name, email),
            )
        except ConflictError as e:
            raise ConflictError("This email is already in use", details={"email": email}) from e
        return User.from_row(rows[0])

    async def delete(self, user_id: int) -> User | None:
        rows = await self._store.query(
            f"DELETE FROM users WHERE id = $1 RETURNING {USER_COLUMNS}",
            (user_id,),
        )
        return User.from_row(rows[0]) if rows else None

    async def health_check(self) -> bool:
        return await self._store.health_check()
