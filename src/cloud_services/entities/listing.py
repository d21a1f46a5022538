"""Cached listing result."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CachedListing:
    """A full entity listing and where it was served from.

    Attributes:
        items: JSON-ready rows, ordered by id
        cached: True when served from the cache, False when loaded from the store
    """

    items: list[dict[str, Any]]
    cached: bool

    @property
    def count(self) -> int:
        return len(self.items)
