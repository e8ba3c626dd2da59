"""Favorite repository implementation backed by SQLAlchemy's async session."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.db.models import Favorite


class FavoriteRepository:
    """Row-level persistence for the ``favorites`` table.

    The repository performs no semantic validation; callers hand it values that
    already passed :func:`backend.services.validation.validate_favorite_payload`.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_page(self, *, take: int, cursor: int | None) -> Sequence[Favorite]:
        """Return up to ``take`` rows strictly after ``cursor`` ordered by id."""
        query = select(Favorite).order_by(Favorite.id.asc()).limit(take)
        if cursor is not None:
            query = query.where(Favorite.id > cursor)

        result = await self._session.execute(query)
        return result.scalars().all()

    async def get(self, favorite_id: int) -> Favorite | None:
        """Load a single favorite by primary key."""
        return await self._session.get(Favorite, favorite_id)

    async def insert(self, values: Mapping[str, Any]) -> Favorite:
        """Persist a new row and return it with its store-assigned id."""
        favorite = Favorite(**values)
        self._session.add(favorite)
        await self._session.flush()
        await self._session.refresh(favorite)
        return favorite

    async def update(self, favorite: Favorite, values: Mapping[str, Any]) -> Favorite:
        """Write ``values`` onto an already loaded row."""
        for attribute, value in values.items():
            setattr(favorite, attribute, value)
        await self._session.flush()
        await self._session.refresh(favorite)
        return favorite

    async def delete(self, favorite: Favorite) -> None:
        """Remove a row immediately."""
        await self._session.delete(favorite)
        await self._session.flush()

    async def delete_all(self) -> int:
        """Remove every row, returning how many were deleted (used by seeding)."""
        result = await self._session.execute(delete(Favorite))
        return result.rowcount or 0
