"""User domain entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class User:
    """A user row as stored in the ``users`` table.

    Attributes:
        id: Surrogate key generated by the store
        name: Display name
        email: Unique, lower-cased email address
        created_at: Creation time set by the store
    """

    id: int
    name: str
    email: str
    created_at: datetime | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "User":
        return cls(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            created_at=row.get("created_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation, also used as the cached listing item."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
