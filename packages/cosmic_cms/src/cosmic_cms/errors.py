"""
Exception handlers that render every failure as an error envelope.
"""

import logging

from cosmic_core.schemas.response import Envelope
from cosmic_db import DoesNotExistError, WriteError
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str | None = None) -> JSONResponse:
    return JSONResponse(Envelope.fail(message).dump(), status_code=status_code)


def format_errors(errors) -> str:
    """
    Flatten pydantic error entries into one readable line.

    >>> format_errors([{"loc": ("body", "title"), "msg": "Field required"}])
    'title: Field required'
    """
    parts = []
    for error in errors:
        loc = [
            str(part)
            for part in error.get("loc", ())
            if part not in ("body", "query", "path")
        ]
        prefix = f"{'.'.join(loc)}: " if loc else ""
        parts.append(f"{prefix}{error.get('msg', '')}")
    return "; ".join(parts)


async def handle_request_validation(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, format_errors(exc.errors()))


async def handle_validation(_request: Request, exc: ValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, format_errors(exc.errors()))


async def handle_not_found(_request: Request, exc: DoesNotExistError) -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, str(exc))


async def handle_write_error(_request: Request, exc: WriteError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def handle_value_error(_request: Request, exc: ValueError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def handle_http_error(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        Envelope.fail(str(exc.detail)).dump(),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(ValidationError, handle_validation)
    app.add_exception_handler(DoesNotExistError, handle_not_found)
    app.add_exception_handler(WriteError, handle_write_error)
    app.add_exception_handler(ValueError, handle_value_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected)
