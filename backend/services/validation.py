"""Validation entry point shared by the API service and the terminal client.

Payloads arrive as loosely typed mappings (decoded JSON bodies or form input).
:func:`validate_favorite_payload` turns them into the typed pydantic models or
raises a single :class:`backend.errors.ValidationError` listing every field that
failed, so callers never observe a partially validated payload.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal, overload

from pydantic import ValidationError as PydanticValidationError

from backend.errors import ValidationError, ValidationIssue
from backend.schemas.favorites import FavoriteCreate, FavoriteUpdate

ValidationMode = Literal["create", "update"]

_ROOT_FIELD = "body"


def issues_from_pydantic(exc: PydanticValidationError) -> list[ValidationIssue]:
    """Flatten pydantic's error list into :class:`ValidationIssue` entries."""

    issues: list[ValidationIssue] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or _ROOT_FIELD
        value = None if error["type"] == "missing" else error.get("input")
        issues.append(
            ValidationIssue(field=location, message=error["msg"], value=value)
        )
    return issues


@overload
def validate_favorite_payload(
    payload: Any, mode: Literal["create"]
) -> FavoriteCreate: ...


@overload
def validate_favorite_payload(
    payload: Any, mode: Literal["update"]
) -> FavoriteUpdate: ...


def validate_favorite_payload(
    payload: Any, mode: ValidationMode
) -> FavoriteCreate | FavoriteUpdate:
    """Validate ``payload`` for a create or a partial update."""

    if not isinstance(payload, Mapping):
        raise ValidationError(
            [
                ValidationIssue(
                    field=_ROOT_FIELD,
                    message="Expected a JSON object",
                    value=payload,
                )
            ]
        )

    if mode == "create":
        model: type[FavoriteCreate] | type[FavoriteUpdate] = FavoriteCreate
    elif mode == "update":
        model = FavoriteUpdate
    else:
        raise ValueError(f"Unknown validation mode: {mode!r}")

    try:
        return model.model_validate(dict(payload))
    except PydanticValidationError as exc:
        raise ValidationError(issues_from_pydantic(exc)) from exc


__all__ = [
    "ValidationMode",
    "issues_from_pydantic",
    "validate_favorite_payload",
]
