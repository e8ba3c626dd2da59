"""Cursor-based (keyset) pagination over the favorites table.

Pages are ordered by ascending primary key.  A cursor is simply the id of the
last row the caller has already seen, so the next page is ``WHERE id > cursor``
which stays stable while rows are inserted (new ids sort after every existing
row) or deleted (the seek lands on the next surviving id).

Query-string values are parsed explicitly: malformed ``take`` values fall back
to the default page size and malformed cursors are treated as absent, while
malformed path identifiers are rejected with :class:`InvalidIdError`.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, Protocol, TypeVar

from backend.db.models import MAX_FAVORITE_ID
from backend.errors import InvalidIdError
from backend.settings import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

_DIGITS = re.compile(r"[0-9]+")
_SIGNED_DIGITS = re.compile(r"[+-]?[0-9]+")

# Any parsed value above the id column range collapses to this one.
OUT_OF_RANGE_ID = MAX_FAVORITE_ID + 1
_MAX_DIGITS = len(str(OUT_OF_RANGE_ID))


class HasId(Protocol):
    id: int


RowT = TypeVar("RowT", bound=HasId)


class PageSource(Protocol[RowT]):
    """Storage surface the paginator needs: an ordered seek past a cursor."""

    async def list_page(self, *, take: int, cursor: int | None) -> Sequence[RowT]:
        """Return up to ``take`` rows with ``id > cursor`` in ascending id order."""


@dataclass(frozen=True)
class PageRequest:
    """Validated pagination parameters."""

    take: int = DEFAULT_PAGE_SIZE
    cursor: int | None = None


@dataclass
class Page(Generic[RowT]):
    """One slice of rows plus the cursor for the following slice."""

    rows: list[RowT] = field(default_factory=list)
    next_cursor: int | None = None


def parse_positive_int(raw: object) -> int | None:
    """Return ``raw`` as a positive integer, or ``None`` when it is not one.

    Accepts ints and strings made only of ASCII digits.  Booleans, floats, signs,
    whitespace and zero are all rejected.  Values beyond the id column range come
    back as :data:`OUT_OF_RANGE_ID`, which no stored row can carry.
    """

    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return min(raw, OUT_OF_RANGE_ID) if raw > 0 else None
    if isinstance(raw, str) and _DIGITS.fullmatch(raw):
        value = _bounded_int(raw)
        return value if value > 0 else None
    return None


def _bounded_int(digits: str) -> int:
    """Convert an unsigned digit string, capping it at :data:`OUT_OF_RANGE_ID`.

    The length check runs before ``int()`` so arbitrarily long inputs never
    reach the interpreter's digit limit.
    """

    significant = digits.lstrip("0")
    if len(significant) > _MAX_DIGITS:
        return OUT_OF_RANGE_ID
    return min(int(significant or "0"), OUT_OF_RANGE_ID)


def parse_take(
    raw: object,
    *,
    default: int = DEFAULT_PAGE_SIZE,
    maximum: int = MAX_PAGE_SIZE,
) -> int:
    """Parse a requested page size and clamp it into ``[1, maximum]``.

    Missing or non-numeric input yields ``default``; numeric input outside the
    range (including zero and negatives) is clamped rather than rejected.
    """

    value: int | None = None
    if isinstance(raw, bool):
        value = None
    elif isinstance(raw, int):
        value = raw
    elif isinstance(raw, str):
        candidate = raw.strip()
        if _SIGNED_DIGITS.fullmatch(candidate):
            magnitude = _bounded_int(candidate.lstrip("+-"))
            value = -magnitude if candidate.startswith("-") else magnitude

    if value is None:
        value = default
    return min(max(value, 1), maximum)


def parse_cursor(raw: object) -> int | None:
    """Parse an optional cursor; anything but a positive integer means "start"."""

    if raw is None or raw == "":
        return None
    return parse_positive_int(raw)


def parse_favorite_id(raw: object) -> int:
    """Parse a path identifier, raising :class:`InvalidIdError` when malformed."""

    value = parse_positive_int(raw)
    if value is None:
        raise InvalidIdError(raw)
    return value


def build_page_request(
    take: object = None,
    cursor: object = None,
    *,
    default_take: int = DEFAULT_PAGE_SIZE,
    max_take: int = MAX_PAGE_SIZE,
) -> PageRequest:
    """Combine raw ``take``/``cursor`` query values into a :class:`PageRequest`."""

    return PageRequest(
        take=parse_take(take, default=default_take, maximum=max_take),
        cursor=parse_cursor(cursor),
    )


def compute_next_cursor(rows: Sequence[HasId], take: int) -> int | None:
    """Return the last id when the page came back full, otherwise ``None``."""

    if rows and len(rows) == take:
        return rows[-1].id
    return None


async def paginate(source: PageSource[RowT], request: PageRequest) -> Page[RowT]:
    """Fetch the page described by ``request`` from ``source``."""

    if request.cursor is not None and request.cursor > MAX_FAVORITE_ID:
        return Page()
    rows = list(await source.list_page(take=request.take, cursor=request.cursor))
    return Page(rows=rows, next_cursor=compute_next_cursor(rows, request.take))


__all__ = [
    "OUT_OF_RANGE_ID",
    "Page",
    "PageRequest",
    "PageSource",
    "build_page_request",
    "compute_next_cursor",
    "paginate",
    "parse_cursor",
    "parse_favorite_id",
    "parse_positive_int",
    "parse_take",
]
