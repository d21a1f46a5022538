import os
from dataclasses import dataclass, field
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()


def _split(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Service
    instance_id: str = os.getenv("INSTANCE_ID", "unknown")
    service_name: str | None = os.getenv("SERVICE_NAME")

    # PostgreSQL
    db_host: str = os.getenv("DB_HOST", "localhost")
    db_port: int = int(os.getenv("DB_PORT", "5432"))
    db_user: str = os.getenv("DB_USER", "clouduser")
    db_password: str = os.getenv("DB_PASSWORD", "cloudpass123")
    db_name: str | None = os.getenv("DB_NAME")  # per-service default when unset
    db_pool_min_size: int = int(os.getenv("DB_POOL_MIN_SIZE", "2"))
    db_pool_max_size: int = int(os.getenv("DB_POOL_MAX_SIZE", "10"))
    db_command_timeout: float = float(os.getenv("DB_COMMAND_TIMEOUT", "30"))
    db_auto_migrate: bool = os.getenv("DB_AUTO_MIGRATE", "true").lower() == "true"

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Users listing cache
    users_cache_key: str = os.getenv("USERS_CACHE_KEY", "users:all")
    users_cache_ttl: int = int(os.getenv("USERS_CACHE_TTL", "60"))

    # CORS
    cors_origins: tuple[str, ...] = field(
        default_factory=lambda: _split(os.getenv("CORS_ORIGIN", "http://localhost:3000"))
    )
    cors_methods: tuple[str, ...] = field(
        default_factory=lambda: _split(os.getenv("CORS_ALLOWED_METHODS", "GET,POST,PUT,DELETE"))
    )

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int | None = int(os.environ["PORT"]) if os.getenv("PORT") else None
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "info")
    log_json: bool = os.getenv("LOG_JSON", "true").lower() == "true"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.users_cache_ttl <= 0:
            raise ValueError("USERS_CACHE_TTL must be a positive number of seconds")

        if not 0 < self.db_pool_min_size <= self.db_pool_max_size:
            raise ValueError(
                f"DB_POOL_MIN_SIZE must be between 1 and DB_POOL_MAX_SIZE, "
                f"got min={self.db_pool_min_size}, max={self.db_pool_max_size}"
            )

    def database_dsn(self, default_name: str) -> str:
        """Build the PostgreSQL DSN, falling back to the service's own database.

        Args:
            default_name: Database used when DB_NAME is not set

        Returns:
            A postgresql:// connection string
        """
        name = self.db_name or default_name
        return f"postgresql://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{name}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def get_redis_client(settings: Settings | None = None) -> redis.Redis:
    """Create an asyncio Redis client instance."""
    settings = settings or get_settings()
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=True,
    )
