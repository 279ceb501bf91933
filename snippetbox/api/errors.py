"""Exception handlers mapping errors onto the response envelope."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from snippetbox.core.exceptions import SnippetboxError, ValidationFailedError
from snippetbox.core.logging import get_logger
from snippetbox.schemas.common import ErrorResponse

logger = get_logger(__name__)

VALUE_ERROR_PREFIX = "Value error, "


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


def format_validation_errors(errors: list[dict]) -> list[str]:
    """Turn pydantic error entries into one readable message per field."""
    messages: list[str] = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = loc[-1] if loc else "body"
        label = field[:1].upper() + field[1:]
        message = str(error.get("msg", "Invalid value"))

        if error.get("type") == "missing":
            messages.append(f"{label} is required")
        elif message.startswith(VALUE_ERROR_PREFIX):
            messages.append(message[len(VALUE_ERROR_PREFIX):])
        else:
            messages.append(f"{label}: {message}")
    return messages


async def snippetbox_error_handler(request: Request, exc: SnippetboxError) -> JSONResponse:
    """Report a domain error with its own status code."""
    errors = exc.errors if isinstance(exc, ValidationFailedError) else None
    logger.info(
        "request_rejected",
        path=request.url.path,
        code=exc.code,
        status=exc.status_code,
    )
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    response = _error_response(
        exc.status_code,
        ErrorResponse(message=exc.message, error=exc.code, errors=errors),
    )
    if headers:
        response.headers.update(headers)
    return response


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 with per-field messages."""
    messages = format_validation_errors(list(exc.errors()))
    logger.info("request_validation_failed", path=request.url.path, errors=messages)
    return _error_response(
        400,
        ErrorResponse(message="Validation Error", error="VALIDATION_ERROR", errors=messages),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Hide internal failures behind a generic 500; log the detail."""
    logger.error(
        "unhandled_error",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_info=exc,
    )
    return _error_response(500, ErrorResponse(message="Server Error", error="INTERNAL_ERROR"))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all handlers to the application."""
    app.add_exception_handler(SnippetboxError, snippetbox_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
