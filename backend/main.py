import logging
import uuid
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from backend import errors
from backend.db.connection import create_tables, dispose_engine
from backend.db.connection import get_database_type as _connection_get_database_type
from backend.db.connection import get_database_url as _connection_get_database_url
from backend.db.connection import get_engine as _connection_get_engine
from backend.settings import get_settings

from .api import favorites
from .schemas.error import ErrorType
from .utils.error_responses import (
    build_error_response,
    build_validation_error_response,
)
from .utils.request_context import get_request_id, set_request_id

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level_numeric,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def validate_environment() -> None:
    """Log warnings for optional configuration left at its defaults."""

    warnings = get_settings().optional_config_warnings()
    if warnings:
        logger.warning("=" * 60)
        logger.warning("Environment Configuration Warnings:")
        for warning in warnings:
            logger.warning("  • %s", warning)
        logger.warning("=" * 60)


def _sanitize_database_url(url: str) -> str:
    """Sanitize database URL to hide password in logs."""
    if "://" not in url:
        return url

    scheme, rest = url.split("://", 1)

    if "@" in rest:
        auth, host_db = rest.split("@", 1)
        if ":" in auth:
            user, _ = auth.split(":", 1)
            return f"{scheme}://{user}:***@{host_db}"
        return f"{scheme}://{auth}@{host_db}"

    return url


def get_database_type() -> str:
    """Return the configured database flavor (patchable by tests)."""

    return _connection_get_database_type()


def get_database_url() -> str:
    """Return the database URL currently in use (patchable by tests)."""

    return _connection_get_database_url()


def get_engine() -> AsyncEngine:
    """Retrieve (and lazily create) the shared SQLAlchemy async engine."""

    return _connection_get_engine()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    validate_environment()

    db_type = get_database_type()
    sanitized_url = _sanitize_database_url(get_database_url())

    logger.info("=" * 60)
    logger.info("Favorites API - Database Preflight Check")
    logger.info("=" * 60)
    logger.info("Database Type: %s", db_type.upper())
    logger.info("Database URL: %s", sanitized_url)

    if db_type == "sqlite":
        logger.info("SQLite mode - creating missing tables")
        await create_tables(get_engine())
    else:
        logger.info("PostgreSQL mode - using Alembic migrations")
        logger.info("Ensure migrations are up to date (run: alembic upgrade head)")

    logger.info("=" * 60)

    yield

    logger.info("Shutting down Favorites API")
    await dispose_engine()


app = FastAPI(
    title="Favorites API",
    version="0.1.0",
    description="REST API managing favorite movies and TV shows.",
    lifespan=lifespan,
    redirect_slashes=False,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add unique request ID to each request for tracking."""
    request_id = str(uuid.uuid4())
    set_request_id(request_id)
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


# Exception handlers
@app.exception_handler(errors.ValidationError)
async def favorite_validation_exception_handler(
    request: Request, exc: errors.ValidationError
):
    """Report every rejected payload field in a single 400 response."""
    logger.warning(
        "Validation error for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        ", ".join(exc.fields),
    )

    error_response = build_validation_error_response(
        message=exc.message,
        status_code=status.HTTP_400_BAD_REQUEST,
        path=str(request.url.path),
        issues=exc.issues,
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
):
    """Handle request-shape failures such as a missing or malformed JSON body."""
    issues = [
        errors.ValidationIssue(
            field=".".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
            value=error.get("input"),
        )
        for error in exc.errors()
    ]

    logger.warning(
        "Request validation error for request %s to %s: %s errors",
        get_request_id(),
        request.url.path,
        len(issues),
    )

    error_response = build_validation_error_response(
        message=errors.ValidationError.message,
        status_code=status.HTTP_400_BAD_REQUEST,
        path=str(request.url.path),
        issues=issues,
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(errors.InvalidIdError)
async def invalid_id_exception_handler(request: Request, exc: errors.InvalidIdError):
    """Reject identifiers that are not positive integers."""
    logger.warning(
        "Invalid id for request %s to %s: %r",
        get_request_id(),
        request.url.path,
        exc.raw_id,
    )

    error_response = build_error_response(
        error_type=ErrorType.INVALID_ID,
        message=exc.message,
        detail=f"Expected a positive integer id, received {exc.raw_id!r}",
        status_code=status.HTTP_400_BAD_REQUEST,
        path=str(request.url.path),
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(errors.NotFoundError)
async def not_found_exception_handler(request: Request, exc: errors.NotFoundError):
    """Report operations that target a favorite which does not exist."""
    logger.info(
        "Favorite %s not found for request %s to %s",
        exc.favorite_id,
        get_request_id(),
        request.url.path,
    )

    error_response = build_error_response(
        error_type=ErrorType.NOT_FOUND,
        message=exc.message,
        detail=f"No favorite with id {exc.favorite_id}",
        status_code=status.HTTP_404_NOT_FOUND,
        path=str(request.url.path),
    )

    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=error_response.model_dump(mode="json"),
    )


def _internal_error_response(request: Request, error_type: ErrorType) -> JSONResponse:
    error_response = build_error_response(
        error_type=error_type,
        message=errors.InternalError.message,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        path=str(request.url.path),
    )

    # Responses built by ServerErrorMiddleware bypass add_request_id.
    request_id = get_request_id()
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(mode="json"),
        headers={"X-Request-ID": request_id} if request_id else None,
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handle store failures without leaking driver details to the client."""
    logger.error(
        "Database error for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        str(exc),
    )

    return _internal_error_response(request, ErrorType.DATABASE_ERROR)


@app.exception_handler(errors.InternalError)
@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Handle all other unhandled exceptions."""
    logger.exception(
        "Unhandled exception for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        type(exc).__name__,
    )

    return _internal_error_response(request, ErrorType.INTERNAL_ERROR)


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    """Simple health endpoint for readiness checks."""
    return {"status": "ok"}


app.include_router(favorites.router, prefix="/favorites", tags=["favorites"])


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""

    configured = get_settings()
    uvicorn.run(
        "backend.main:app",
        host=configured.host,
        port=configured.port,
        log_level=configured.log_level.lower(),
    )


if __name__ == "__main__":
    run()
