"""
Domain errors and their HTTP rendering.
Challenge: Every failure path returns the same `{"message": ...}` body with the right status.
Design: Services and dependencies raise MarketplaceError subclasses; one handler maps them.
"""

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class MarketplaceError(Exception):
    """Base error carrying the HTTP status and client-facing message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Server error"

    def __init__(
        self,
        message: str | None = None,
        *,
        error: str | None = None,
        headers: dict[str, str] | None = None,
    ):
        self.message = message or self.message
        self.error = error
        self.headers = headers
        super().__init__(self.message)


class Unauthenticated(MarketplaceError):
    """No bearer credential supplied."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "No token provided"

    def __init__(self, message: str | None = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class InvalidCredential(MarketplaceError):
    """Credential supplied but malformed, expired or badly signed."""

    status_code = status.HTTP_403_FORBIDDEN
    message = "Invalid token"


class Forbidden(MarketplaceError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Not authorized"


class NotFound(MarketplaceError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class InvalidInput(MarketplaceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "All fields required"


class Conflict(MarketplaceError):
    status_code = status.HTTP_409_CONFLICT
    message = "Already exists"


class PayloadTooLarge(MarketplaceError):
    status_code = status.HTTP_413_CONTENT_TOO_LARGE
    message = "File too large"


class ServerError(MarketplaceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server error"


class UpstreamError(MarketplaceError):
    """The media host rejected or failed a call; `error` carries its reason."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Upload failed"


def validation_message(errors: Sequence[Any]) -> str:
    """Collapse pydantic errors into one readable line."""
    if any(err.get("type") == "missing" for err in errors):
        return InvalidInput.message
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path"))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid input"


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(MarketplaceError)
    async def marketplace_error_handler(request: Request, exc: MarketplaceError) -> JSONResponse:
        content = {"message": exc.message}
        if exc.error:
            content["error"] = exc.error
        return JSONResponse(
            status_code=exc.status_code,
            content=content,
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=InvalidInput.status_code,
            content={"message": validation_message(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=ServerError.status_code,
            content={"message": ServerError.message},
        )
