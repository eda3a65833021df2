"""
Application error types and the centralized error responder.

Every error leaving the API is rendered as:

    {"error": {"message": <str or list of str>, "status": <int>}}
"""

import logging
from typing import List, Union

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

Message = Union[str, List[str]]


class AppError(Exception):
    """Base error carrying an HTTP status and a user-facing message."""

    status: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: Message = None, status: int = None):
        self.message = message if message is not None else self.default_message
        if status is not None:
            self.status = status
        super().__init__(self.message)


class BadRequestError(AppError):
    status = 400
    default_message = "Bad Request"


class UnauthorizedError(AppError):
    status = 401
    default_message = "Unauthorized"


class NotFoundError(AppError):
    status = 404
    default_message = "Not Found"


def error_response(message: Message, status: int) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={"error": {"message": message, "status": status}},
    )


def format_validation_errors(errors) -> List[str]:
    """Flatten pydantic error dicts into one readable message per error."""
    messages = []
    for err in errors:
        # FastAPI prefixes locations with "body"/"query"/"path"
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) if loc else "instance"
        messages.append(f"{field}: {err['msg']}")
    return messages


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return error_response(exc.message, exc.status)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(format_validation_errors(exc.errors()), 400)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.detail, exc.status_code)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response("Internal Server Error", 500)


def register_exception_handlers(app: FastAPI) -> None:
    """Route every error kind through the JSON error envelope."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
