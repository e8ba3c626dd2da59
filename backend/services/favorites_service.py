"""Business logic powering the favorites API endpoints.

Each public coroutine is one unit of work against the store:

* ``list_favorites`` – parses ``take``/``cursor`` and returns one keyset page.
* ``get_favorite`` – loads a single row by id.
* ``create_favorite`` – validates a full payload and inserts it.
* ``update_favorite`` – validates a partial payload and merges it onto the row.
* ``delete_favorite`` – removes a row.

Identifiers are parsed before the repository is consulted, so malformed ids
raise :class:`InvalidIdError` without touching the database.  The service keeps
no state between requests; a fresh instance is wired per request by
:func:`get_favorites_service`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.db.connection import get_db
from backend.db.models import MAX_FAVORITE_ID, Favorite
from backend.db.repositories import FavoriteRepository
from backend.errors import NotFoundError
from backend.schemas.favorites import FavoritePage, FavoriteRead, FavoriteUpdate
from backend.services.pagination import (
    build_page_request,
    paginate,
    parse_favorite_id,
)
from backend.services.validation import validate_favorite_payload
from backend.settings import AppSettings, get_settings

logger = logging.getLogger(__name__)


@runtime_checkable
class FavoriteRepositoryProtocol(Protocol):
    """Minimal repository surface required by :class:`FavoritesService`."""

    async def list_page(self, *, take: int, cursor: int | None) -> Sequence[Any]:
        """Return up to ``take`` rows with ``id > cursor`` ordered by id."""

    async def get(self, favorite_id: int) -> Any | None:
        """Return the row for ``favorite_id`` or ``None``."""

    async def insert(self, values: Mapping[str, Any]) -> Any:
        """Persist a new row and return it with its assigned id."""

    async def update(self, favorite: Any, values: Mapping[str, Any]) -> Any:
        """Write ``values`` onto ``favorite`` and return it."""

    async def delete(self, favorite: Any) -> None:
        """Remove ``favorite``."""


def merge_favorite_update(stored: FavoriteRead, update: FavoriteUpdate) -> FavoriteRead:
    """Apply only the keys present in ``update`` onto a copy of ``stored``.

    The stored model is never mutated; ``id`` and timestamps are not part of the
    update schema and therefore always carry over unchanged.
    """

    return stored.model_copy(update=update.present_fields())


class FavoritesService:
    """Coordinates validation, pagination, and persistence for favorites."""

    def __init__(
        self,
        repository: FavoriteRepositoryProtocol,
        *,
        settings: AppSettings | None = None,
    ) -> None:
        self._repository = repository
        self._settings = settings or get_settings()

    async def list_favorites(
        self, *, take: object = None, cursor: object = None
    ) -> FavoritePage:
        request = build_page_request(
            take,
            cursor,
            default_take=self._settings.default_page_size,
            max_take=self._settings.max_page_size,
        )
        page = await paginate(self._repository, request)
        return FavoritePage(
            data=[FavoriteRead.model_validate(row) for row in page.rows],
            next_cursor=page.next_cursor,
        )

    async def get_favorite(self, favorite_id: object) -> FavoriteRead:
        favorite = await self._require_favorite(parse_favorite_id(favorite_id))
        return FavoriteRead.model_validate(favorite)

    async def create_favorite(self, payload: Any) -> FavoriteRead:
        validated = validate_favorite_payload(payload, "create")
        favorite = await self._repository.insert(validated.model_dump())
        logger.info("Created favorite %s (%s)", favorite.id, validated.title)
        return FavoriteRead.model_validate(favorite)

    async def update_favorite(self, favorite_id: object, payload: Any) -> FavoriteRead:
        parsed_id = parse_favorite_id(favorite_id)
        update = validate_favorite_payload(payload, "update")
        favorite = await self._require_favorite(parsed_id)

        merged = merge_favorite_update(FavoriteRead.model_validate(favorite), update)
        changes = {
            field: getattr(merged, field) for field in update.present_fields()
        }
        if changes:
            favorite = await self._repository.update(favorite, changes)
            logger.info(
                "Updated favorite %s fields=%s", parsed_id, sorted(changes.keys())
            )
        return FavoriteRead.model_validate(favorite)

    async def delete_favorite(self, favorite_id: object) -> None:
        parsed_id = parse_favorite_id(favorite_id)
        favorite = await self._require_favorite(parsed_id)
        await self._repository.delete(favorite)
        logger.info("Deleted favorite %s", parsed_id)

    async def _require_favorite(self, favorite_id: int) -> Favorite:
        if favorite_id > MAX_FAVORITE_ID:
            raise NotFoundError(favorite_id)
        favorite = await self._repository.get(favorite_id)
        if favorite is None:
            raise NotFoundError(favorite_id)
        return favorite


async def get_favorites_service(
    session: AsyncSession = Depends(get_db),
) -> FavoritesService:
    """FastAPI dependency that wires the service to a request-scoped session."""

    return FavoritesService(FavoriteRepository(session))
