"""Single boundary that turns exceptions into the failure envelope."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from larder.core.errors import AppError, AuthenticationError, INTERNAL_ERROR_MESSAGE
from larder.utils.response import error_response

logger = logging.getLogger(__name__)

DUPLICATE_DATA_MESSAGE = "Oops, data you filled already exists"


def _field_name(loc: tuple) -> str:
    # Drop the request part ("body", "query", "path") from the location.
    parts = [str(item) for item in loc if item not in ("body", "query", "path", "header")]
    return ".".join(parts)


def _field_message(err: dict) -> str:
    if err.get("type") == "value_error" and "error" in err.get("ctx", {}):
        return str(err["ctx"]["error"])
    return str(err.get("msg"))


async def app_error_handler(request: Request, exc: AppError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return error_response(exc.status_code, exc.errors, headers=headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": _field_name(tuple(err.get("loc", ()))), "message": _field_message(err)}
        for err in exc.errors()
    ]
    return error_response(422, errors)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def integrity_error_handler(request: Request, exc: IntegrityError):
    # Constraint names and SQL stay in the log, never in the response.
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return error_response(status.HTTP_400_BAD_REQUEST, DUPLICATE_DATA_MESSAGE)


async def unexpected_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers; more specific types first."""
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(RequestValidationError)(validation_exception_handler)
    app.exception_handler(StarletteHTTPException)(http_exception_handler)
    app.exception_handler(IntegrityError)(integrity_error_handler)
    app.exception_handler(Exception)(unexpected_exception_handler)
