"""
Shared fixtures and in-memory fakes for the service tests.
"""

from collections.abc import Sequence
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

import pytest
from fastapi.testclient import TestClient

from cloud_services.api import products_app, users_app
from cloud_services.config import Settings
from cloud_services.entities import NewProduct, Product, ProductFilter, ProductPatch, User
from cloud_services.errors import ConflictError, DependencyError
from cloud_services.metrics import ProductMetrics, ServiceMetrics


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self) -> None:
        self.now = 1_000.0

    def advance(self, seconds: float) -> None:
        self.now += seconds


class InMemoryCache:
    """CacheStore fake honoring per-key expiry against a FakeClock."""

    def __init__(self, clock: FakeClock) -> None:
        self._clock = clock
        self._data: dict[str, tuple[str, float]] = {}
        self.fail_reads = False
        self.fail_writes = False
        self.fail_deletes = False
        self.get_calls = 0
        self.set_calls: list[tuple[str, int]] = []
        self.delete_calls: list[str] = []

    async def get(self, key: str) -> str | None:
        self.get_calls += 1
        if self.fail_reads:
            raise DependencyError("cache read failed")
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock.now >= expires_at:
            del self._data[key]
            return None
        return value

    async def set_with_expiry(self, key: str, value: str, ttl_seconds: int) -> None:
        self.set_calls.append((key, ttl_seconds))
        if self.fail_writes:
            raise DependencyError("cache write failed")
        self._data[key] = (value, self._clock.now + ttl_seconds)

    async def delete(self, key: str) -> int:
        self.delete_calls.append(key)
        if self.fail_deletes:
            raise DependencyError("cache delete failed")
        return 1 if self._data.pop(key, None) is not None else 0

    async def health_check(self) -> bool:
        return not self.fail_reads

    async def close(self) -> None:
        pass

    def contains(self, key: str) -> bool:
        return key in self._data


class InMemoryUserRepository:
    """UserRepository fake with a unique email index."""

    def __init__(self) -> None:
        self._rows: dict[int, User] = {}
        self._next_id = 1
        self.list_calls = 0
        self.fail = False

    async def list_all(self) -> list[User]:
        self.list_calls += 1
        if self.fail:
            raise DependencyError("store unavailable")
        return [self._rows[key] for key in sorted(self._rows)]

    async def get_by_id(self, user_id: int) -> User | None:
        return self._rows.get(user_id)

    async def create(self, name: str, email: str) -> User:
        if any(user.email == email for user in self._rows.values()):
            raise ConflictError("This email is already in use")
        user = User(
            id=self._next_id,
            name=name,
            email=email,
            created_at=datetime(2024, 1, 1, 12, 0, self._next_id % 60, tzinfo=timezone.utc),
        )
        self._rows[user.id] = user
        self._next_id += 1
        return user

    async def delete(self, user_id: int) -> User | None:
        return self._rows.pop(user_id, None)

    async def health_check(self) -> bool:
        return not self.fail


class InMemoryProductRepository:
    """ProductRepository fake applying filters and patches in Python."""

    def __init__(self) -> None:
        self._rows: dict[int, Product] = {}
        self._next_id = 1
        self.update_calls = 0
        self.fail = False

    async def search(self, filters: ProductFilter) -> list[Product]:
        if self.fail:
            raise DependencyError("store unavailable")
        result = []
        for key in sorted(self._rows):
            product = self._rows[key]
            if filters.category is not None and product.category != filters.category:
                continue
            if filters.min_price is not None and product.price < filters.min_price:
                continue
            if filters.max_price is not None and product.price > filters.max_price:
                continue
            if filters.in_stock and product.stock <= 0:
                continue
            result.append(product)
        return result

    async def list_by_category(self, category: str) -> list[Product]:
        matching = [p for p in self._rows.values() if p.category == category]
        return sorted(matching, key=lambda p: p.name)

    async def get_by_id(self, product_id: int) -> Product | None:
        return self._rows.get(product_id)

    async def create(self, product: NewProduct) -> Product:
        created = Product(
            id=self._next_id,
            name=product.name,
            price=product.price,
            stock=product.stock,
            description=product.description,
            category=product.category,
        )
        self._rows[created.id] = created
        self._next_id += 1
        return created

    async def update(self, product_id: int, patch: ProductPatch) -> Product | None:
        self.update_calls += 1
        current = self._rows.get(product_id)
        if current is None:
            return None
        values = {
            "id": current.id,
            "name": current.name,
            "price": current.price,
            "stock": current.stock,
            "description": current.description,
            "category": current.category,
            "created_at": current.created_at,
        }
        values.update(patch.provided())
        updated = Product(**values)
        self._rows[product_id] = updated
        return updated

    async def delete(self, product_id: int) -> Product | None:
        return self._rows.pop(product_id, None)

    async def totals(self) -> tuple[int, int]:
        if self.fail:
            raise DependencyError("store unavailable")
        return len(self._rows), sum(p.stock for p in self._rows.values())

    async def health_check(self) -> bool:
        return True

    def seed(self, **values: Any) -> Product:
        values.setdefault("stock", 0)
        values["price"] = Decimal(str(values["price"]))
        product = Product(id=self._next_id, **values)
        self._rows[product.id] = product
        self._next_id += 1
        return product


class RecordingStore:
    """Store fake that records statements and replays queued rows."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.results: list[list[dict[str, Any]]] = []
        self.error: Exception | None = None

    async def query(self, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        self.calls.append((sql, tuple(params)))
        if self.error is not None:
            raise self.error
        return self.results.pop(0) if self.results else []

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        pass


@pytest.fixture
def settings():
    """Settings independent of the environment."""
    return Settings(
        instance_id="test-instance",
        users_cache_key="users:all",
        users_cache_ttl=60,
        log_level="warning",
        log_json=False,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return InMemoryCache(clock)


@pytest.fixture
def user_repository():
    return InMemoryUserRepository()


@pytest.fixture
def product_repository():
    return InMemoryProductRepository()


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def user_metrics():
    return ServiceMetrics(entity="user")


@pytest.fixture
def product_metrics():
    return ProductMetrics()


@pytest.fixture
def users_client(settings, user_repository, cache, user_metrics):
    """Users app wired to in-memory collaborators."""
    app = users_app.create_app(
        settings=settings,
        repository=user_repository,
        cache=cache,
        metrics=user_metrics,
    )
    with TestClient(app) as client:
        yield client


@pytest.fixture
def products_client(settings, product_repository, product_metrics):
    """Products app wired to an in-memory repository."""
    app = products_app.create_app(
        settings=settings,
        repository=product_repository,
        metrics=product_metrics,
    )
    with TestClient(app) as client:
        yield client
