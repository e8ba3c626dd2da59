"""Error response schemas for consistent error handling."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from backend.errors import ValidationIssue


class ErrorType(str, Enum):
    """Types of errors that can occur."""

    VALIDATION_ERROR = "validation_error"
    INVALID_ID = "invalid_id"
    NOT_FOUND = "not_found"
    DATABASE_ERROR = "database_error"
    INTERNAL_ERROR = "internal_error"


class ErrorResponse(BaseModel):
    """Standardized error response model."""

    error_type: ErrorType = Field(..., description="Category of error")
    message: str = Field(..., description="Human-readable error message")
    detail: str | None = Field(None, description="Additional error details or context")
    status_code: int = Field(..., description="HTTP status code")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="When error occurred"
    )
    request_id: str | None = Field(None, description="Unique request identifier for tracking")
    path: str | None = Field(None, description="Request path that caused the error")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_type": "not_found",
                "message": "Favorite not found",
                "detail": "No favorite with id 42",
                "status_code": 404,
                "timestamp": "2025-11-03T10:30:00Z",
                "request_id": "3f0c6c1e-6d0e-4b57-9a43-6f3c1b2a9d10",
                "path": "/favorites/42",
            }
        }
    )


class ValidationErrorResponse(ErrorResponse):
    """Extended error response for validation errors."""

    error_type: ErrorType = Field(default=ErrorType.VALIDATION_ERROR)
    issues: list[ValidationIssue] = Field(
        default_factory=list, description="Every field that failed validation"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_type": "validation_error",
                "message": "Validation error",
                "detail": "2 validation error(s)",
                "status_code": 400,
                "timestamp": "2025-11-03T10:30:00Z",
                "request_id": "3f0c6c1e-6d0e-4b57-9a43-6f3c1b2a9d10",
                "path": "/favorites",
                "issues": [
                    {"field": "title", "message": "Field required", "value": None},
                    {
                        "field": "type",
                        "message": "Input should be 'MOVIE' or 'TV_SHOW'",
                        "value": "FILM",
                    },
                ],
            }
        }
    )
