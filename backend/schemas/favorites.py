"""Pydantic schemas that power the favorites API surface."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from backend.db.models import FavoriteType

_NULL_MESSAGE = "Field cannot be null"


class FavoriteCreate(BaseModel):
    """Payload for creating a favorite; every descriptive field is required."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = Field(..., min_length=1)
    type: FavoriteType = Field(..., description="Either MOVIE or TV_SHOW")
    director: str = Field(..., min_length=1)
    budget: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    duration: str = Field(..., min_length=1)
    year_time: str = Field(
        ...,
        alias="yearTime",
        min_length=1,
        description="Release year or airing span, e.g. 2010 or 2008-2013.",
    )
    description: str | None = Field(
        None,
        description="Optional free-form synopsis. May be empty but not null.",
    )

    @field_validator("description", mode="before")
    @classmethod
    def _reject_null_description(cls, value: Any) -> Any:
        if value is None:
            raise ValueError(_NULL_MESSAGE)
        return value


class FavoriteUpdate(BaseModel):
    """Partial update payload; only keys present in the request are applied."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str | None = Field(None, min_length=1)
    type: FavoriteType | None = None
    director: str | None = Field(None, min_length=1)
    budget: str | None = Field(None, min_length=1)
    location: str | None = Field(None, min_length=1)
    duration: str | None = Field(None, min_length=1)
    year_time: str | None = Field(None, alias="yearTime", min_length=1)
    description: str | None = None

    @field_validator(
        "title",
        "type",
        "director",
        "budget",
        "location",
        "duration",
        "year_time",
        "description",
        mode="before",
    )
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        """Explicit nulls are rejected; omitted keys never reach validators."""

        if value is None:
            raise ValueError(_NULL_MESSAGE)
        return value

    def present_fields(self) -> dict[str, Any]:
        """Return the supplied fields keyed by ORM attribute name."""

        return self.model_dump(exclude_unset=True)


class FavoriteRead(BaseModel):
    """Read model exposed in API responses."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int = Field(..., description="Surrogate primary key, assigned by the store")
    title: str
    type: FavoriteType
    director: str
    budget: str
    location: str
    duration: str
    year_time: str = Field(
        ...,
        validation_alias=AliasChoices("year_time", "yearTime"),
        serialization_alias="yearTime",
    )
    description: str | None = None
    created_at: datetime | None = Field(
        None,
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )
    updated_at: datetime | None = Field(
        None,
        validation_alias=AliasChoices("updated_at", "updatedAt"),
        serialization_alias="updatedAt",
    )


class FavoritePage(BaseModel):
    """Container returned by the listing endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    data: list[FavoriteRead] = Field(default_factory=list)
    next_cursor: int | None = Field(
        None,
        validation_alias=AliasChoices("next_cursor", "nextCursor"),
        serialization_alias="nextCursor",
        description="Id to pass as ``cursor`` for the next page; null at the end.",
    )
