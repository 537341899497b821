"""Exception handlers that turn failures into the error envelope."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from clouddrive.errors import CloudDriveError

from .responses import error_response, failure

logger = logging.getLogger(__name__)


async def drive_error_handler(request: Request, exc: CloudDriveError) -> JSONResponse:
    logger.debug(
        "%s %s -> %s: %s",
        request.method,
        request.url.path,
        exc.__class__.__name__,
        exc,
    )
    return error_response(exc)


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Malformed query, body or form fields answer 400 like any validation error."""
    fields = [".".join(str(loc) for loc in error["loc"]) for error in exc.errors()]
    logger.debug("%s %s -> invalid request: %s", request.method, request.url.path, fields)
    return failure(
        400,
        "Request validation failed",
        "validation",
        {"fields": ", ".join(fields)},
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    reason = "notFound" if exc.status_code == 404 else "http"
    message = f"Route not found: {request.method} {request.url.path}" if exc.status_code == 404 else str(exc.detail)
    return failure(exc.status_code, message, reason)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CloudDriveError, drive_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
