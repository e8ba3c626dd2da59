from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


# Imported late to avoid circular dependency with the favorites module.
from .favorites import MAX_FAVORITE_ID, Favorite, FavoriteType  # noqa: E402

__all__ = [
    "Base",
    "Favorite",
    "FavoriteType",
    "MAX_FAVORITE_ID",
]
