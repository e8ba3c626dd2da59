"""Async HTTP client for the favorites API built on :mod:`httpx`."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import BaseModel

from backend.errors import ValidationIssue
from backend.schemas.favorites import FavoritePage, FavoriteRead
from frontend.settings import get_client_settings

logger = logging.getLogger(__name__)

FavoritePayload = Mapping[str, Any] | BaseModel


class ApiError(Exception):
    """Raised when a request fails, carrying the server's ``message`` if any."""

    def __init__(
        self,
        message: str | None,
        *,
        status_code: int | None = None,
        issues: list[ValidationIssue] | None = None,
    ) -> None:
        super().__init__(message or "Request failed")
        self.message = message
        self.status_code = status_code
        self.issues = issues or []


def _serialize_payload(payload: FavoritePayload) -> dict[str, Any]:
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", by_alias=True, exclude_unset=True)
    return dict(payload)


def _error_from_response(response: httpx.Response) -> ApiError:
    message: str | None = None
    issues: list[ValidationIssue] = []
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        raw_message = body.get("message")
        if isinstance(raw_message, str) and raw_message:
            message = raw_message
        raw_issues = body.get("issues")
        if isinstance(raw_issues, list):
            issues = [
                ValidationIssue.model_validate(item)
                for item in raw_issues
                if isinstance(item, dict)
            ]

    return ApiError(message, status_code=response.status_code, issues=issues)


class FavoritesApiClient:
    """Thin wrapper over ``httpx.AsyncClient`` speaking the favorites contract.

    Use as an async context manager, or call :meth:`aclose` when done.  A custom
    ``transport`` lets tests route requests to an ASGI app or a mock handler.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_client_settings()
        self.base_url = (base_url or settings.normalized_base_url).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.request_timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> FavoritesApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def health(self) -> dict[str, Any]:
        response = await self._request("GET", "/health")
        return response.json()

    async def list_favorites(
        self, *, take: int, cursor: int | None = None
    ) -> FavoritePage:
        params: dict[str, str] = {"take": str(take)}
        if cursor is not None:
            params["cursor"] = str(cursor)
        response = await self._request("GET", "/favorites", params=params)
        return FavoritePage.model_validate(response.json())

    async def get_favorite(self, favorite_id: int) -> FavoriteRead:
        response = await self._request("GET", f"/favorites/{favorite_id}")
        return FavoriteRead.model_validate(response.json())

    async def create_favorite(self, payload: FavoritePayload) -> FavoriteRead:
        response = await self._request(
            "POST", "/favorites", json=_serialize_payload(payload)
        )
        return FavoriteRead.model_validate(response.json())

    async def update_favorite(
        self, favorite_id: int, payload: FavoritePayload
    ) -> FavoriteRead:
        response = await self._request(
            "PUT", f"/favorites/{favorite_id}", json=_serialize_payload(payload)
        )
        return FavoriteRead.model_validate(response.json())

    async def delete_favorite(self, favorite_id: int) -> None:
        await self._request("DELETE", f"/favorites/{favorite_id}")

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise ApiError(str(exc) or None) from exc

        if response.is_error:
            error = _error_from_response(response)
            logger.error(
                "%s %s returned %s: %s",
                method,
                path,
                response.status_code,
                error.message,
            )
            raise error
        return response
