"""View state for the paginated favorites list.

:class:`FavoritesView` owns the client-side list explicitly.  It only changes
through the operations defined here: loading the first page, appending the
next page, prepending a created row, patching a row by id, and removing a row
by id.  Mutations are applied locally after the server confirms them; the list
is never re-fetched to reconcile, and failures only set :attr:`error`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from backend.schemas.favorites import FavoritePage, FavoriteRead
from backend.services.validation import validate_favorite_payload
from frontend.api_client import ApiError
from frontend.settings import get_client_settings

logger = logging.getLogger(__name__)

LOAD_FAILED = "Failed to load"
SAVE_FAILED = "Failed to save"
DELETE_FAILED = "Failed to delete"


class FavoritesClientProtocol(Protocol):
    """Subset of :class:`frontend.api_client.FavoritesApiClient` the view uses."""

    async def list_favorites(
        self, *, take: int, cursor: int | None = None
    ) -> FavoritePage: ...

    async def create_favorite(self, payload: Any) -> FavoriteRead: ...

    async def update_favorite(self, favorite_id: int, payload: Any) -> FavoriteRead: ...

    async def delete_favorite(self, favorite_id: int) -> None: ...


class FavoritesView:
    """Client-side state for browsing and editing favorites."""

    def __init__(
        self,
        client: FavoritesClientProtocol,
        *,
        page_size: int | None = None,
        scroll_threshold: int | None = None,
    ) -> None:
        settings = get_client_settings()
        self._client = client
        self.page_size = page_size if page_size is not None else settings.page_size
        self.scroll_threshold = (
            scroll_threshold if scroll_threshold is not None else settings.scroll_threshold
        )
        self.entries: list[FavoriteRead] = []
        self.next_cursor: int | None = None
        self.loading = True
        self.is_loading_more = False
        self.error: str | None = None

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None

    # -- loading -----------------------------------------------------------------

    async def mount(self) -> None:
        """Load the first page, replacing whatever the list held."""

        self.loading = True
        await self._load_page(None)

    def should_load_more(self, visible_index: int) -> bool:
        """Return True when ``visible_index`` is close enough to the list end."""

        if self.next_cursor is None or self.is_loading_more or self.loading:
            return False
        remaining = len(self.entries) - 1 - visible_index
        return remaining <= self.scroll_threshold

    async def on_scroll(self, visible_index: int) -> bool:
        """Load the next page if the scroll position is near the end.

        Returns whether a page load was issued.
        """

        if not self.should_load_more(visible_index):
            return False
        return await self.load_more()

    async def load_more(self) -> bool:
        """Append the page after :attr:`next_cursor`; one load at a time."""

        if self.next_cursor is None or self.is_loading_more or self.loading:
            return False
        self.is_loading_more = True
        await self._load_page(self.next_cursor)
        return True

    async def _load_page(self, cursor: int | None) -> None:
        try:
            page = await self._client.list_favorites(take=self.page_size, cursor=cursor)
        except ApiError as exc:
            logger.error("Loading favorites failed: %s", exc)
            self.error = exc.message or LOAD_FAILED
        else:
            if cursor is not None:
                self.append(page.data)
            else:
                self.replace(page.data)
            self.next_cursor = page.next_cursor
            self.error = None
        finally:
            self.loading = False
            self.is_loading_more = False

    # -- mutations -----------------------------------------------------------------

    async def save(
        self,
        data: Mapping[str, Any],
        *,
        editing: FavoriteRead | None = None,
    ) -> FavoriteRead | None:
        """Create a favorite, or update ``editing`` with the submitted fields.

        Form input is validated locally first; a
        :class:`backend.errors.ValidationError` propagates to the caller so the
        form can show per-field messages.  Server failures set :attr:`error` and
        return ``None``.
        """

        if editing is None:
            payload = validate_favorite_payload(data, "create")
            try:
                created = await self._client.create_favorite(payload)
            except ApiError as exc:
                logger.error("Creating favorite failed: %s", exc)
                self.error = exc.message or SAVE_FAILED
                return None
            self.prepend(created)
            return created

        update = validate_favorite_payload(data, "update")
        try:
            await self._client.update_favorite(editing.id, update)
        except ApiError as exc:
            logger.error("Updating favorite %s failed: %s", editing.id, exc)
            self.error = exc.message or SAVE_FAILED
            return None
        fields = update.present_fields()
        self.patch(editing.id, fields)
        return editing.model_copy(update=fields)

    async def delete(self, favorite_id: int) -> bool:
        """Delete a favorite and drop it from the list on success."""

        try:
            await self._client.delete_favorite(favorite_id)
        except ApiError as exc:
            logger.error("Deleting favorite %s failed: %s", favorite_id, exc)
            self.error = exc.message or DELETE_FAILED
            return False
        self.remove(favorite_id)
        return True

    # -- reconciliation primitives ----------------------------------------------

    def replace(self, rows: Sequence[FavoriteRead]) -> None:
        self.entries = list(rows)

    def append(self, rows: Sequence[FavoriteRead]) -> None:
        self.entries = [*self.entries, *rows]

    def prepend(self, row: FavoriteRead) -> None:
        self.entries = [row, *self.entries]

    def patch(self, favorite_id: int, fields: Mapping[str, Any]) -> None:
        self.entries = [
            entry.model_copy(update=dict(fields)) if entry.id == favorite_id else entry
            for entry in self.entries
        ]

    def remove(self, favorite_id: int) -> None:
        self.entries = [entry for entry in self.entries if entry.id != favorite_id]
