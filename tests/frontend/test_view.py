"""Tests for :class:`frontend.view.FavoritesView` using a scripted client."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from backend.db.models import FavoriteType
from backend.errors import ValidationError
from backend.schemas.favorites import FavoritePage, FavoriteRead, FavoriteUpdate
from frontend.api_client import ApiError
from frontend.view import FavoritesView


def _favorite(favorite_id: int, title: str | None = None) -> FavoriteRead:
    return FavoriteRead(
        id=favorite_id,
        title=title or f"Favorite {favorite_id}",
        type=FavoriteType.MOVIE,
        director="Christopher Nolan",
        budget="$160M",
        location="LA",
        duration="148 min",
        year_time="2010",
    )


class FakeClient:
    """Serves pages from a fixed list and records every call."""

    def __init__(self, rows: list[FavoriteRead]) -> None:
        self.rows = rows
        self.calls: list[tuple[str, Any]] = []
        self.fail_with: ApiError | None = None
        self.gate: asyncio.Event | None = None

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def list_favorites(self, *, take: int, cursor: int | None = None) -> FavoritePage:
        self.calls.append(("list", (take, cursor)))
        if self.gate is not None:
            await self.gate.wait()
        self._maybe_fail()
        remaining = [row for row in self.rows if cursor is None or row.id > cursor]
        page = remaining[:take]
        next_cursor = page[-1].id if len(page) == take else None
        return FavoritePage(data=page, next_cursor=next_cursor)

    async def create_favorite(self, payload: Any) -> FavoriteRead:
        self.calls.append(("create", payload))
        self._maybe_fail()
        new_id = max((row.id for row in self.rows), default=0) + 1
        return _favorite(new_id, payload.title)

    async def update_favorite(self, favorite_id: int, payload: Any) -> FavoriteRead:
        self.calls.append(("update", (favorite_id, payload)))
        self._maybe_fail()
        return _favorite(favorite_id)

    async def delete_favorite(self, favorite_id: int) -> None:
        self.calls.append(("delete", favorite_id))
        self._maybe_fail()


CREATE_FORM = {
    "title": "Interstellar",
    "type": "MOVIE",
    "director": "Christopher Nolan",
    "budget": "$165M",
    "location": "Alberta",
    "duration": "169 min",
    "yearTime": "2014",
}


@pytest.fixture
def client() -> FakeClient:
    return FakeClient([_favorite(n) for n in range(1, 13)])


@pytest.mark.asyncio
async def test_mount_loads_first_page(client: FakeClient) -> None:
    view = FavoritesView(client, page_size=10, scroll_threshold=3)
    assert view.loading is True

    await view.mount()

    assert [entry.id for entry in view.entries] == list(range(1, 11))
    assert view.next_cursor == 10
    assert view.loading is False
    assert view.error is None


@pytest.mark.asyncio
async def test_scroll_near_end_appends_next_page(client: FakeClient) -> None:
    view = FavoritesView(client, page_size=10, scroll_threshold=3)
    await view.mount()

    assert await view.on_scroll(2) is False
    assert await view.on_scroll(6) is True

    assert [entry.id for entry in view.entries] == list(range(1, 13))
    assert view.next_cursor is None
    assert client.calls[-1] == ("list", (10, 10))
    assert view.should_load_more(11) is False


@pytest.mark.asyncio
async def test_load_more_is_ignored_while_in_flight(client: FakeClient) -> None:
    view = FavoritesView(client, page_size=10)
    await view.mount()
    view.is_loading_more = True

    assert await view.load_more() is False
    assert len(client.calls) == 1


@pytest.mark.asyncio
async def test_failed_load_sets_server_message(client: FakeClient) -> None:
    client.fail_with = ApiError("Internal server error", status_code=500)
    view = FavoritesView(client)

    await view.mount()

    assert view.error == "Internal server error"
    assert view.entries == []
    assert view.loading is False


@pytest.mark.asyncio
async def test_failed_load_without_message_uses_fallback(client: FakeClient) -> None:
    client.fail_with = ApiError(None)
    view = FavoritesView(client)

    await view.mount()

    assert view.error == "Failed to load"


@pytest.mark.asyncio
async def test_create_prepends_without_refetch(client: FakeClient) -> None:
    view = FavoritesView(client, page_size=10)
    await view.mount()

    created = await view.save(CREATE_FORM)

    assert created is not None
    assert view.entries[0].title == "Interstellar"
    assert len(view.entries) == 11
    assert [name for name, _ in client.calls] == ["list", "create"]


@pytest.mark.asyncio
async def test_invalid_form_raises_before_any_request(client: FakeClient) -> None:
    view = FavoritesView(client, page_size=10)
    await view.mount()

    with pytest.raises(ValidationError) as exc_info:
        await view.save({**CREATE_FORM, "title": ""})

    assert exc_info.value.fields == ["title"]
    assert [name for name, _ in client.calls] == ["list"]


@pytest.mark.asyncio
async def test_update_patches_only_submitted_fields(client: FakeClient) -> None:
    view = FavoritesView(client, page_size=10)
    await view.mount()
    editing = view.entries[2]

    await view.save({"title": "Renamed"}, editing=editing)

    patched = view.entries[2]
    assert patched.id == editing.id
    assert patched.title == "Renamed"
    assert patched.director == editing.director
    _, (favorite_id, payload) = client.calls[-1]
    assert favorite_id == editing.id
    assert isinstance(payload, FavoriteUpdate)
    assert payload.present_fields() == {"title": "Renamed"}


@pytest.mark.asyncio
async def test_failed_update_keeps_list_and_sets_error(client: FakeClient) -> None:
    view = FavoritesView(client, page_size=10)
    await view.mount()
    before = list(view.entries)
    client.fail_with = ApiError(None, status_code=500)

    result = await view.save({"title": "Renamed"}, editing=view.entries[0])

    assert result is None
    assert view.entries == before
    assert view.error == "Failed to save"


@pytest.mark.asyncio
async def test_delete_removes_entry(client: FakeClient) -> None:
    view = FavoritesView(client, page_size=10)
    await view.mount()

    assert await view.delete(4) is True

    assert 4 not in [entry.id for entry in view.entries]
    assert len(view.entries) == 9


@pytest.mark.asyncio
async def test_failed_delete_reports_server_message(client: FakeClient) -> None:
    view = FavoritesView(client, page_size=10)
    await view.mount()
    client.fail_with = ApiError("Favorite not found", status_code=404)

    assert await view.delete(4) is False

    assert view.error == "Favorite not found"
    assert len(view.entries) == 10


@pytest.mark.asyncio
async def test_concurrent_scrolls_issue_a_single_page_request() -> None:
    client = FakeClient([_favorite(n) for n in range(1, 31)])
    view = FavoritesView(client, page_size=10, scroll_threshold=3)
    await view.mount()
    client.gate = asyncio.Event()

    async def release() -> None:
        await asyncio.sleep(0)
        client.gate.set()

    first, second, _ = await asyncio.gather(
        view.on_scroll(8), view.on_scroll(9), release()
    )

    assert (first, second) == (True, False)
    assert [name for name, _ in client.calls] == ["list", "list"]
    assert [entry.id for entry in view.entries] == list(range(1, 21))
    assert view.is_loading_more is False
