"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.routers import bookmarks
from core.auth import UnauthorizedError, require_api_token
from core.config import get_settings
from core.logging import configure_logging
from services.exceptions import (
    BookmarkNotFoundError,
    BookmarkValidationError,
    InfrastructureError,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    configure_logging(get_settings())
    yield


def error_response(
    status_code: int,
    message: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build the {"error": {"message": ...}} body used by every error response."""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message}},
        headers=headers,
    )


app_settings = get_settings()

app = FastAPI(
    title="Bookmarks API",
    description="CRUD service for saved bookmarks.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(BookmarkValidationError)
async def validation_exception_handler(
    _request: Request, exc: BookmarkValidationError,
) -> JSONResponse:
    """Validation failures are 400s carrying the rule's message."""
    return error_response(400, exc.message)


@app.exception_handler(BookmarkNotFoundError)
async def not_found_exception_handler(
    _request: Request, _exc: BookmarkNotFoundError,
) -> JSONResponse:
    """Unknown bookmark ids are 404s."""
    return error_response(404, "Bookmark not found")


@app.exception_handler(InfrastructureError)
async def infrastructure_exception_handler(
    request: Request, exc: InfrastructureError,
) -> JSONResponse:
    """Store failures are logged for operators and hidden behind a generic 500."""
    logger.error(
        "Store failure during %s on %s %s",
        exc.operation,
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return error_response(500, "Internal server error")


@app.exception_handler(UnauthorizedError)
async def unauthorized_exception_handler(
    _request: Request, _exc: UnauthorizedError,
) -> JSONResponse:
    """Missing or wrong bearer token."""
    return error_response(
        401, "Unauthorized request", headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(
    _request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """
    Report malformed requests (invalid JSON, non-integer ids) as 400s.

    Bookmark bodies are validated by the service; this only sees what FastAPI
    rejects before the endpoint runs.
    """
    errors = exc.errors()
    if not errors:
        return error_response(400, "Invalid request")
    first = errors[0]
    if first.get("type") == "json_invalid":
        return error_response(400, "Request body must be valid JSON")
    location = ".".join(str(part) for part in first.get("loc", ()))
    return error_response(400, f"Invalid {location}: {first.get('msg', 'invalid value')}")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    _request: Request, exc: StarletteHTTPException,
) -> JSONResponse:
    """Render framework HTTP errors (unknown route, wrong method) in the same shape."""
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", response_class=PlainTextResponse, dependencies=[Depends(require_api_token)])
async def root() -> str:
    """Liveness greeting."""
    return "Hello, world!"


app.include_router(bookmarks.router)
# Later clients address the same resource under /api
app.include_router(bookmarks.router, prefix="/api")
