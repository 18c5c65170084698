import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()

DEFAULT_STATIC_ASSETS = (
    "/",
    "/static/js/bundle.js",
    "/static/css/main.css",
    "/manifest.json",
    "/favicon.ico",
    "/logo192.png",
    "/logo512.png",
)


def _split_assets(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return DEFAULT_STATIC_ASSETS
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Cache partitions
    cache_prefix: str = os.getenv("CACHE_PREFIX", "sevadaan")
    cache_version: str = os.getenv("CACHE_VERSION", "v1.0.0")
    static_assets: tuple[str, ...] = field(
        default_factory=lambda: _split_assets(os.getenv("STATIC_ASSETS"))
    )

    # Upstream origin (network side of every strategy)
    upstream_origin: str = os.getenv("UPSTREAM_ORIGIN", "http://localhost:3000")
    request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "30"))

    # Storage
    store_backend: str = os.getenv("STORE_BACKEND", "redis")  # "redis" or "memory"
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    queue_db_name: str = os.getenv("QUEUE_DB_NAME", "SevaDaanOfflineDB")

    # App shell / push defaults
    app_root: str = os.getenv("APP_ROOT", "/")
    push_title: str = os.getenv("PUSH_TITLE", "SevaDaan NGO Platform")
    push_body: str = os.getenv("PUSH_BODY", "You have new updates from SevaDaan NGO Platform")
    push_icon: str = os.getenv("PUSH_ICON", "/logo192.png")

    # Gateway
    auto_install: bool = os.getenv("AUTO_INSTALL", "true").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    @property
    def static_cache_name(self) -> str:
        """Name of the app-shell partition for the current version."""
        return f"{self.cache_prefix}-static-{self.cache_version}"

    @property
    def dynamic_cache_name(self) -> str:
        """Name of the runtime partition for the current version."""
        return f"{self.cache_prefix}-dynamic-{self.cache_version}"

    @property
    def root_cache_name(self) -> str:
        """Version tag of the worker as a whole. Never opened as a partition."""
        return f"{self.cache_prefix}-ngo-{self.cache_version}"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.store_backend not in ("redis", "memory"):
            raise ValueError(f"STORE_BACKEND must be 'redis' or 'memory', got {self.store_backend!r}")

        if not self.cache_version.strip():
            raise ValueError("CACHE_VERSION must not be empty")

        if self.request_timeout <= 0:
            raise ValueError("REQUEST_TIMEOUT must be positive")

        if not self.static_assets:
            raise ValueError("STATIC_ASSETS must list at least one asset")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client(config: Settings | None = None) -> redis.Redis:
    """Create an asyncio Redis client instance."""
    config = config or settings
    return redis.from_url(
        config.redis_url,
        password=config.redis_password,
        decode_responses=True,
    )


def setup_logging(level: str | None = None) -> None:
    """Configure root logging for the gateway process."""
    level_name = (level or settings.log_level).upper()
    numeric = logging.getLevelName(level_name)
    if not isinstance(numeric, int):
        raise ValueError(f"Invalid logging level: {level_name}")

    logging.basicConfig(
        level=numeric,
        format="[%(asctime)s][%(levelname)s][%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
