"""Configuration settings for the BookSwap services."""

from dataclasses import dataclass
from typing import Any, Dict
import os


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class BackendConfig:
    """Hosted backend connection configuration."""
    url: str = "http://localhost:54321"
    anon_key: str = ""
    request_timeout_seconds: float = 30.0


@dataclass
class FallbackConfig:
    """Fixture fallback configuration."""
    force_fixtures: bool = False
    fixture_latency_ms: int = 300


@dataclass
class StorageConfig:
    """Object storage configuration."""
    image_bucket: str = "book-images"
    image_content_type: str = "image/jpeg"


@dataclass
class MarketplaceSettings:
    """Main service configuration settings."""
    log_level: str = "INFO"
    backend: BackendConfig = None
    fallback: FallbackConfig = None
    storage: StorageConfig = None

    def __post_init__(self):
        """Initialize nested configs if not provided."""
        if self.backend is None:
            self.backend = BackendConfig()
        if self.fallback is None:
            self.fallback = FallbackConfig()
        if self.storage is None:
            self.storage = StorageConfig()


def read_app_config() -> Dict[str, Any]:
    """Read the configuration dictionary from the environment."""
    return {
        "log_level": os.getenv("BOOKSWAP_LOG_LEVEL", "INFO"),
        "backend": {
            "url": os.getenv("SUPABASE_URL", "http://localhost:54321"),
            "anon_key": os.getenv("SUPABASE_ANON_KEY", ""),
            "request_timeout_seconds": float(os.getenv("BOOKSWAP_REQUEST_TIMEOUT_SECONDS", "30")),
        },
        "fallback": {
            "force_fixtures": _env_flag("BOOKSWAP_FORCE_FIXTURES"),
            "fixture_latency_ms": int(os.getenv("BOOKSWAP_FIXTURE_LATENCY_MS", "300")),
        },
        "storage": {
            "image_bucket": os.getenv("BOOKSWAP_IMAGE_BUCKET", "book-images"),
            "image_content_type": os.getenv("BOOKSWAP_IMAGE_CONTENT_TYPE", "image/jpeg"),
        },
    }


# Default configuration, as read at import time
APP_CONFIG = read_app_config()


def get_settings() -> MarketplaceSettings:
    """Get settings from the current environment."""
    config = read_app_config()
    return MarketplaceSettings(
        log_level=config["log_level"],
        backend=BackendConfig(**config["backend"]),
        fallback=FallbackConfig(**config["fallback"]),
        storage=StorageConfig(**config["storage"]),
    )
