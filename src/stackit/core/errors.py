"""Domain errors and the JSON error envelope returned by the API.

Services raise the exceptions defined here; the handlers at the bottom of the
module translate them (and framework errors) into
``{"success": false, "message": ..., "code": ..., "errors": [...]}``.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class StackItError(Exception):
    """Base class for failures raised by the service layer."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.errors = errors


class ValidationError(StackItError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"


class AuthenticationError(StackItError):
    """Missing, invalid or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "authentication_error"


class AuthorizationError(StackItError):
    """Caller is authenticated but lacks the role or ownership required."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"


class NotFoundError(StackItError):
    """Referenced entity does not exist or has been soft-deleted."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class ConflictError(StackItError):
    """Duplicate unique field or a lost race on a concurrent update."""

    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


def error_body(
    message: str,
    *,
    code: str,
    errors: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Build the failure envelope shared by every handler."""
    body: dict[str, Any] = {"success": False, "message": message, "code": code}
    if errors:
        body["errors"] = errors
    return body


async def stackit_error_handler(request: Request, exc: StackItError) -> JSONResponse:
    """Translate a domain error raised by a service."""
    logger.info(
        "%s %s rejected: %s (%s)",
        request.method,
        request.url.path,
        exc.message,
        exc.code,
    )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, code=exc.code, errors=exc.errors),
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Keep framework-raised HTTP errors in the same envelope."""
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message, code="http_error"),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report request validation failures field by field."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in error.get("loc", ()) if loc != "body"),
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "value_error"),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation errors", code="validation_error", errors=errors),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle anything the service layer did not anticipate."""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error", code="internal_error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all error handlers to the application."""
    app.add_exception_handler(StackItError, stackit_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError, validation_exception_handler  # type: ignore[arg-type]
    )
    app.add_exception_handler(Exception, general_exception_handler)
