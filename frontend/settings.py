"""Client-side configuration loaded from the environment or a ``.env`` file."""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "http://localhost:4000"


class ClientSettings(BaseSettings):
    """Settings consumed by :mod:`frontend.api_client` and :mod:`frontend.view`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        validation_alias=AliasChoices("API_BASE_URL", "VITE_API_BASE", "VITE_API_URL"),
        description="Base URL of the favorites API.",
    )
    page_size: int = Field(
        default=10,
        ge=1,
        le=100,
        validation_alias=AliasChoices("CLIENT_PAGE_SIZE", "page_size"),
        description="Rows requested per page load.",
    )
    scroll_threshold: int = Field(
        default=3,
        ge=0,
        validation_alias=AliasChoices("CLIENT_SCROLL_THRESHOLD", "scroll_threshold"),
        description="Rows from the end of the list that trigger the next page load.",
    )
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        validation_alias=AliasChoices("CLIENT_REQUEST_TIMEOUT", "request_timeout"),
        description="Seconds before an HTTP request is abandoned.",
    )

    @property
    def normalized_base_url(self) -> str:
        return self.api_base_url.strip().rstrip("/")


@lru_cache(maxsize=1)
def get_client_settings() -> ClientSettings:
    """Return a cached instance of :class:`ClientSettings`."""

    return ClientSettings()
