"""
Settings Module - Centralized Configuration Management
=======================================================

All configuration is loaded from environment variables (a local .env file is
honoured for development). Settings are immutable dataclasses, grouped per
concern, with a single cached root instance.

Usage:
    from localdirectory.infrastructure.config import get_settings
    settings = get_settings()
    print(settings.admin.admin_key)
"""

import os
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_ADMIN_KEY = "supersecretadminkey"

DATA_SOURCE_LIVE = "live"
DATA_SOURCE_MEMORY = "memory"


def _split_origins(value: str) -> tuple:
    return tuple(origin.strip() for origin in value.split(",") if origin.strip())


@dataclass(frozen=True)
class ServerSettings:
    """HTTP server settings."""

    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "3000")))

    # Browser origins allowed to call the API from another port (e.g. Live Server)
    cors_origins: tuple = field(
        default_factory=lambda: _split_origins(
            os.getenv(
                "CORS_ORIGINS",
                "http://127.0.0.1:5500,http://localhost:5500",
            )
        )
    )


@dataclass(frozen=True)
class DatabaseSettings:
    """SQLite storage settings."""

    path: Path = field(
        default_factory=lambda: Path(os.getenv("DATABASE_FILE", "directory.db"))
    )


@dataclass(frozen=True)
class AdminSettings:
    """Shared admin secret. Only ever compared on the server."""

    admin_key: str = field(
        default_factory=lambda: os.getenv("ADMIN_KEY", DEFAULT_ADMIN_KEY)
    )


@dataclass(frozen=True)
class ClientSettings:
    """Settings for the console clients."""

    api_base_url: str = field(
        default_factory=lambda: os.getenv("API_BASE_URL", "http://localhost:3000/api")
    )

    # "live" talks to the API, "memory" uses the built-in demo listings
    data_source: str = field(
        default_factory=lambda: os.getenv("DIRECTORY_DATA_SOURCE", DATA_SOURCE_LIVE).lower()
    )
    timeout_seconds: float = field(
        default_factory=lambda: float(os.getenv("REQUEST_TIMEOUT", "10"))
    )


@dataclass(frozen=True)
class Settings:
    """
    Root settings container - single source of truth for all configuration.
    """

    server: ServerSettings = field(default_factory=ServerSettings)
    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    admin: AdminSettings = field(default_factory=AdminSettings)
    client: ClientSettings = field(default_factory=ClientSettings)

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    def validate(self) -> list[str]:
        """
        Validate settings and return list of warnings.
        Returns empty list if all settings are valid.
        """
        issues = []

        if self.admin.admin_key == DEFAULT_ADMIN_KEY:
            issues.append(
                "WARNING: Using the built-in default ADMIN_KEY. "
                "Set ADMIN_KEY to a private value."
            )

        if self.client.data_source not in (DATA_SOURCE_LIVE, DATA_SOURCE_MEMORY):
            issues.append(
                f"WARNING: Unknown DIRECTORY_DATA_SOURCE '{self.client.data_source}'. "
                f"Expected '{DATA_SOURCE_LIVE}' or '{DATA_SOURCE_MEMORY}'."
            )

        return issues


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get singleton Settings instance.
    Cached to ensure consistent settings throughout application lifecycle.
    """
    return Settings()


def setup_logging(settings: Settings | None = None) -> None:
    """Configure root logging from settings."""
    if settings is None:
        settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)
