"""Tests for :mod:`backend.utils.error_responses`."""

from __future__ import annotations

from backend.errors import ValidationIssue
from backend.schemas.error import ErrorType
from backend.utils.error_responses import (
    build_error_response,
    build_validation_error_response,
)
from backend.utils.request_context import clear_request_id, set_request_id


def test_build_error_response_embeds_request_id() -> None:
    token = set_request_id("abc-123")
    try:
        response = build_error_response(
            error_type=ErrorType.NOT_FOUND,
            message="Favorite not found",
            status_code=404,
            path="/favorites/9",
        )
    finally:
        clear_request_id(token)

    assert response.request_id == "abc-123"
    assert response.timestamp.tzinfo is not None
    assert response.detail is None


def test_build_error_response_without_request_context() -> None:
    token = set_request_id("")
    try:
        response = build_error_response(
            error_type=ErrorType.INTERNAL_ERROR,
            message="Internal server error",
            status_code=500,
            path="/favorites",
        )
    finally:
        clear_request_id(token)

    assert response.request_id is None


def test_build_validation_error_response_counts_issues() -> None:
    issues = [
        ValidationIssue(field="title", message="Field required"),
        ValidationIssue(field="yearTime", message="Field required"),
    ]

    response = build_validation_error_response(
        issues=issues,
        message="Validation error",
        status_code=400,
        path="/favorites",
        request_id="explicit",
    )

    assert response.error_type is ErrorType.VALIDATION_ERROR
    assert response.detail == "2 validation error(s)"
    assert response.request_id == "explicit"
    assert response.model_dump(mode="json")["issues"][1]["field"] == "yearTime"
