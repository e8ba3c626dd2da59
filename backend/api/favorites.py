"""FastAPI router exposing CRUD operations for favorites.

Query and path parameters are declared as plain strings: the service parses
them explicitly so malformed ``take``/``cursor`` values fall back to defaults
and malformed ids surface as ``InvalidIdError`` (400) instead of FastAPI's
generic 422 response.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response, status

from backend.schemas.favorites import FavoritePage, FavoriteRead
from backend.services.favorites_service import FavoritesService, get_favorites_service

router = APIRouter()


@router.get("", response_model=FavoritePage)
async def list_favorites(
    take: str | None = Query(None, description="Page size, clamped into [1, 100]"),
    cursor: str | None = Query(
        None, description="Id of the last favorite already received"
    ),
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoritePage:
    """Return one page of favorites ordered by id."""

    return await service.list_favorites(take=take, cursor=cursor)


@router.post(
    "",
    response_model=FavoriteRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_favorite(
    payload: Any = Body(...),
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoriteRead:
    """Create a favorite from a complete payload."""

    return await service.create_favorite(payload)


@router.get("/{favorite_id}", response_model=FavoriteRead)
async def get_favorite(
    favorite_id: str,
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoriteRead:
    """Retrieve a single favorite by identifier."""

    return await service.get_favorite(favorite_id)


@router.put("/{favorite_id}", response_model=FavoriteRead)
async def update_favorite(
    favorite_id: str,
    payload: Any = Body(...),
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoriteRead:
    """Apply a partial update and return the full row."""

    return await service.update_favorite(favorite_id, payload)


@router.delete("/{favorite_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_favorite(
    favorite_id: str,
    service: FavoritesService = Depends(get_favorites_service),
) -> Response:
    """Remove a favorite."""

    await service.delete_favorite(favorite_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
