"""Entity repository protocols.

Services depend on these instead of SQL, so they can be exercised
against in-memory implementations.
"""

from typing import Protocol, runtime_checkable

from cloud_services.entities import NewProduct, Product, ProductFilter, ProductPatch, User


@runtime_checkable
class UserRepository(Protocol):
    """Persistence contract for users."""

    async def list_all(self) -> list[User]:
        """Return every user ordered by id ascending."""
        ...

    async def get_by_id(self, user_id: int) -> User | None:
        ...

    async def create(self, name: str, email: str) -> User:
        """Insert a user.

        Raises:
            ConflictError: If the email is already in use
        """
        ...

    async def delete(self, user_id: int) -> User | None:
        """Delete a user and return the removed row, or None if absent."""
        ...

    async def health_check(self) -> bool:
        ...


@runtime_checkable
class ProductRepository(Protocol):
    """Persistence contract for products."""

    async def search(self, filters: ProductFilter) -> list[Product]:
        """Return the products matching every supplied predicate, ordered by id."""
        ...

    async def list_by_category(self, category: str) -> list[Product]:
        """Return the products of one category, ordered by name."""
        ...

    async def get_by_id(self, product_id: int) -> Product | None:
        ...

    async def create(self, product: NewProduct) -> Product:
        ...

    async def update(self, product_id: int, patch: ProductPatch) -> Product | None:
        """Apply the supplied fields only. Returns None if the product is absent."""
        ...

    async def delete(self, product_id: int) -> Product | None:
        ...

    async def totals(self) -> tuple[int, int]:
        """Return the product count and the summed stock of the catalog."""
        ...

    async def health_check(self) -> bool:
        ...
