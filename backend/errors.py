"""Domain exceptions raised by the favorites service layer.

The HTTP layer maps each class onto a status code in :mod:`backend.main`; the
service and validation modules only ever raise these types so they stay free of
FastAPI imports.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field

__all__ = [
    "FavoritesError",
    "InternalError",
    "InvalidIdError",
    "NotFoundError",
    "ValidationError",
    "ValidationIssue",
]


class ValidationIssue(BaseModel):
    """A single field that failed validation."""

    field: str = Field(..., description="Field that failed validation")
    message: str = Field(..., description="Why the value was rejected")
    value: Any = Field(None, description="Value that failed validation")


class FavoritesError(Exception):
    """Base class for every error the favorites domain raises on purpose."""

    message: str = "Favorites operation failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message is not None:
            self.message = message


class ValidationError(FavoritesError):
    """Aggregate failure listing every rejected field of a payload."""

    message = "Validation error"

    def __init__(
        self, issues: Sequence[ValidationIssue], message: str | None = None
    ) -> None:
        super().__init__(message)
        self.issues: list[ValidationIssue] = list(issues)

    @property
    def fields(self) -> list[str]:
        return [issue.field for issue in self.issues]


class InvalidIdError(FavoritesError):
    """Raised when an identifier is not a well-formed positive integer."""

    message = "Invalid id"

    def __init__(self, raw_id: object = None) -> None:
        super().__init__()
        self.raw_id = raw_id


class NotFoundError(FavoritesError):
    """Raised when an operation targets a favorite that does not exist."""

    message = "Favorite not found"

    def __init__(self, favorite_id: int) -> None:
        super().__init__()
        self.favorite_id = favorite_id


class InternalError(FavoritesError):
    """Unexpected failure whose details must not reach the client."""

    message = "Internal server error"
