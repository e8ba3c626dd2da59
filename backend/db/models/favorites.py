"""SQLAlchemy ORM model for favorite movies and TV shows.

Every row is a flat record: there are no relationships, no soft-delete flags,
and the surrogate key is the only ordering the API relies on.  The table asks
SQLite for ``AUTOINCREMENT`` so identifiers of deleted rows are never handed
out again, matching the sequence semantics PostgreSQL provides natively.
"""

from __future__ import annotations

import enum
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from . import Base

# Largest value the ``id`` column holds (PostgreSQL ``integer``).
MAX_FAVORITE_ID = 2**31 - 1


def utcnow():
    """Return current UTC datetime."""
    return datetime.now(timezone.utc)


class FavoriteType(str, enum.Enum):
    """Kinds of titles a favorite entry can describe."""

    MOVIE = "MOVIE"
    TV_SHOW = "TV_SHOW"


class Favorite(Base):
    """A single favorite movie or TV show."""

    __tablename__ = "favorites"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[FavoriteType] = mapped_column(
        Enum(
            FavoriteType,
            name="favorite_type",
            native_enum=False,
            length=16,
            validate_strings=True,
        ),
        nullable=False,
    )
    director: Mapped[str] = mapped_column(Text, nullable=False)
    budget: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(Text, nullable=False)
    duration: Mapped[str] = mapped_column(Text, nullable=False)
    year_time: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="Release year or airing span, e.g. ``2010`` or ``2008-2013``.",
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    def __repr__(self) -> str:
        return f"Favorite(id={self.id!r}, title={self.title!r}, type={self.type!r})"
