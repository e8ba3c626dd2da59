"""Repository package for the database access layer."""

from backend.db.repositories.favorite_repository import FavoriteRepository

__all__ = ["FavoriteRepository"]
