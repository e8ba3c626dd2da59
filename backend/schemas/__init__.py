"""Pydantic schemas for API requests and responses."""

from backend.schemas.favorites import (  # noqa: F401
    FavoriteCreate,
    FavoritePage,
    FavoriteRead,
    FavoriteUpdate,
)
