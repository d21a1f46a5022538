"""Prometheus instruments for one service process.

Each app owns a ``ServiceMetrics`` bound to its own ``CollectorRegistry``;
the instance is created in the lifespan and injected where it is needed.
"""

from collections.abc import Callable

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram

HTTP_LATENCY_BUCKETS = (0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1, 5)


class ServiceMetrics:
    """Request, operation and cache instruments for a single entity service."""

    def __init__(self, entity: str, registry: CollectorRegistry | None = None) -> None:
        """Initialize the instruments.

        Args:
            entity: Entity name used for the operations counter ("user", "product")
            registry: Target registry. A fresh one is created when omitted.
        """
        self.registry = registry or CollectorRegistry()
        self.entity = entity

        self.http_requests = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "route", "status_code"],
            registry=self.registry,
        )
        self.http_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "route", "status_code"],
            buckets=HTTP_LATENCY_BUCKETS,
            registry=self.registry,
        )
        self.http_errors = Counter(
            "http_errors_total",
            "Total HTTP responses with status >= 400",
            ["method", "route", "status_code"],
            registry=self.registry,
        )
        self.operations = Counter(
            f"{entity}_operations_total",
            f"Total operations on {entity} records",
            ["operation"],
            registry=self.registry,
        )
        self.cache_hits = Counter(
            "cache_hits_total",
            "Total cache hits",
            ["cache_type"],
            registry=self.registry,
        )
        self.cache_misses = Counter(
            "cache_misses_total",
            "Total cache misses",
            ["cache_type"],
            registry=self.registry,
        )
        self.db_connections = Gauge(
            "db_connections_active",
            "Connections currently held by the database pool",
            registry=self.registry,
        )

    def observe_request(self, method: str, route: str, status_code: int, duration: float) -> None:
        labels = {"method": method, "route": route, "status_code": str(status_code)}
        self.http_requests.labels(**labels).inc()
        self.http_duration.labels(**labels).observe(duration)
        if status_code >= 400:
            self.http_errors.labels(**labels).inc()

    def record_operation(self, operation: str) -> None:
        self.operations.labels(operation=operation).inc()

    def record_cache_hit(self, cache_type: str) -> None:
        self.cache_hits.labels(cache_type=cache_type).inc()

    def record_cache_miss(self, cache_type: str) -> None:
        self.cache_misses.labels(cache_type=cache_type).inc()

    def track_db_connections(self, read_size: Callable[[], float]) -> None:
        """Report the pool size through ``read_size`` at every collection."""
        self.db_connections.set_function(read_size)


class ProductMetrics(ServiceMetrics):
    """Product service instruments, with catalog-wide gauges."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        super().__init__(entity="product", registry=registry)
        self.products_count = Gauge(
            "products_count",
            "Number of products in the catalog",
            registry=self.registry,
        )
        self.products_total_stock = Gauge(
            "products_total_stock",
            "Sum of stock over every product",
            registry=self.registry,
        )

    def set_catalog_totals(self, count: int, total_stock: int) -> None:
        self.products_count.set(count)
        self.products_total_stock.set(total_stock)
