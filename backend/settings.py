"""Centralized configuration management for the favorites backend."""

from __future__ import annotations

import logging
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables defined in a local .env file before instantiating the
# settings singleton so scripts importing :mod:`backend.settings` see the same
# values as the API process.
load_dotenv()

# -- Application-wide constants -------------------------------------------------

DEFAULT_SQLITE_DATABASE_URL = "sqlite+aiosqlite:///./data/favorites.db"
SQLITE_PREFIXES = ("sqlite+aiosqlite://",)
SQLITE_SYNC_PREFIX = "sqlite://"
POSTGRES_ASYNC_PREFIX = "postgresql+psycopg://"
POSTGRES_SYNC_PREFIXES = ("postgres://", "postgresql://")
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 4000
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def _normalize_origin(origin: str) -> str:
    """Return the origin stripped of whitespace and trailing slashes."""

    return origin.strip().rstrip("/")


class AppSettings(BaseSettings):
    """Typed configuration surface built on top of ``pydantic-settings``.

    The class encapsulates the environment variables consumed by the API and
    exposes derived helpers (normalized database URL, numeric log level) so
    downstream modules never repeat the parsing logic.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    database_url: str | None = Field(
        default=None,
        alias="DATABASE_URL",
        description=(
            "SQLAlchemy-compatible database URL. PostgreSQL URLs supplied in"
            " sync format (postgres:// or postgresql://) are coerced into the"
            " async psycopg driver string; SQLite URLs use aiosqlite."
        ),
    )
    host: str = Field(
        default=DEFAULT_HOST,
        alias="HOST",
        description="Interface the HTTP server binds to.",
    )
    port: int = Field(
        default=DEFAULT_PORT,
        alias="PORT",
        description="Port the HTTP server listens on.",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        alias="LOG_LEVEL",
        description="Root logging level (e.g. INFO, DEBUG, WARNING).",
    )
    cors_allow_origins_raw: str | None = Field(
        default=None,
        alias="CORS_ALLOW_ORIGINS",
        description="Comma-separated list of allowed CORS origins. Unset allows all.",
    )
    slow_query_threshold: float = Field(
        default=0.1,
        alias="SLOW_QUERY_THRESHOLD",
        description="Seconds after which a statement is logged as slow.",
    )
    default_page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        alias="DEFAULT_PAGE_SIZE",
        ge=1,
        description="Page size used when ``take`` is missing or malformed.",
    )
    max_page_size: int = Field(
        default=MAX_PAGE_SIZE,
        alias="MAX_PAGE_SIZE",
        ge=1,
        description="Upper bound ``take`` is clamped to.",
    )

    @property
    def resolved_database_url(self) -> str:
        """Return the async-compatible database URL after applying fallbacks."""

        url = (self.database_url or "").strip()
        if not url:
            return DEFAULT_SQLITE_DATABASE_URL

        for prefix in POSTGRES_SYNC_PREFIXES:
            if url.startswith(prefix):
                return url.replace(prefix, POSTGRES_ASYNC_PREFIX, 1)

        if url.startswith(POSTGRES_ASYNC_PREFIX) or url.startswith(SQLITE_PREFIXES):
            return url

        if url.startswith(SQLITE_SYNC_PREFIX):
            return url.replace(SQLITE_SYNC_PREFIX, SQLITE_PREFIXES[0], 1)

        raise RuntimeError(
            f"Expected a PostgreSQL or SQLite connection string, received: {url}"
        )

    @property
    def database_type(self) -> str:
        """Return ``sqlite`` when using SQLite otherwise ``postgresql``."""

        if self.resolved_database_url.startswith("sqlite"):
            return "sqlite"
        return "postgresql"

    @property
    def cors_allow_origins(self) -> list[str]:
        """Return normalised CORS origins, defaulting to every origin."""

        if not self.cors_allow_origins_raw:
            return ["*"]

        origins = [
            _normalize_origin(origin)
            for origin in self.cors_allow_origins_raw.split(",")
            if origin.strip()
        ]
        return [origin for origin in origins if origin] or ["*"]

    @property
    def log_level_numeric(self) -> int:
        """Translate ``log_level`` into the numeric constant expected by logging."""

        candidate = logging.getLevelName(self.log_level.upper())
        if isinstance(candidate, int):
            return candidate
        return logging.INFO

    def optional_config_warnings(self) -> list[str]:
        """Return human-readable warnings for unset optional configuration."""

        warnings: list[str] = []

        if not self.database_url:
            warnings.append(
                "DATABASE_URL is not set - using the local SQLite file "
                f"{DEFAULT_SQLITE_DATABASE_URL}"
            )

        if not self.cors_allow_origins_raw:
            warnings.append(
                "CORS_ALLOW_ORIGINS is not set - every origin is allowed"
            )

        return warnings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of :class:`AppSettings`."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_PORT",
    "DEFAULT_SQLITE_DATABASE_URL",
    "MAX_PAGE_SIZE",
    "POSTGRES_ASYNC_PREFIX",
    "POSTGRES_SYNC_PREFIXES",
    "get_settings",
]
