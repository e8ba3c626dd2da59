"""Helper functions for constructing structured API error responses.

Keeping response construction in one module avoids duplicated boilerplate in
each FastAPI exception handler.  The utilities below embed the request ID and a
timezone-aware timestamp automatically so that every payload shares a consistent
shape regardless of where the error originated.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from backend.errors import ValidationIssue
from backend.schemas.error import (
    ErrorResponse,
    ErrorType,
    ValidationErrorResponse,
)
from backend.utils.request_context import get_request_id

__all__ = [
    "build_error_response",
    "build_validation_error_response",
]


def _current_timestamp() -> datetime:
    """Return a timezone-aware timestamp for error payloads."""

    return datetime.now(UTC)


def build_validation_error_response(
    *,
    issues: Sequence[ValidationIssue],
    message: str,
    status_code: int,
    path: str,
    detail: str | None = None,
    request_id: str | None = None,
) -> ValidationErrorResponse:
    """Construct a ``ValidationErrorResponse`` enriched with metadata.

    ``detail`` defaults to an issue count so clients that only read ``detail``
    still learn how many fields were rejected.
    """

    resolved_request_id = request_id or get_request_id()
    return ValidationErrorResponse(
        error_type=ErrorType.VALIDATION_ERROR,
        message=message,
        detail=detail if detail is not None else f"{len(issues)} validation error(s)",
        status_code=status_code,
        timestamp=_current_timestamp(),
        request_id=resolved_request_id or None,
        path=path,
        issues=list(issues),
    )


def build_error_response(
    *,
    error_type: ErrorType,
    message: str,
    status_code: int,
    path: str,
    detail: str | None = None,
    request_id: str | None = None,
) -> ErrorResponse:
    """Construct a generic ``ErrorResponse`` enriched with metadata."""

    resolved_request_id = request_id or get_request_id()
    return ErrorResponse(
        error_type=error_type,
        message=message,
        detail=detail,
        status_code=status_code,
        timestamp=_current_timestamp(),
        request_id=resolved_request_id or None,
        path=path,
    )
