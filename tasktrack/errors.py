"""Error taxonomy and the single place where errors become HTTP responses.

Routers raise one of the ``AppError`` subclasses below; the handlers installed
by :func:`register_error_handlers` turn them (and anything FastAPI or
Starlette raise on their own) into ``{success: false, message, errors?}``.
"""
import logging
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tasktrack import config
from tasktrack.schemas.common import ErrorResponse, FieldError

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[FieldError]] = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Validation failed"


class InvalidIdError(AppError):
    status_code = 400
    default_message = "Invalid task ID"


class AuthenticationError(AppError):
    status_code = 401
    default_message = "Authentication required"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class DuplicateResourceError(AppError):
    status_code = 409
    default_message = "Resource already exists"


class RateLimitError(AppError):
    status_code = 429
    default_message = "Too many requests, please try again later."


class InternalError(AppError):
    status_code = 500


def error_body(message: str, errors: Optional[List[FieldError]] = None) -> dict:
    return ErrorResponse(message=message, errors=errors).model_dump(exclude_none=True)


async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        return await unhandled_error_handler(request, exc)
    logger.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.errors))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append(FieldError(field=".".join(loc) or "body", message=err.get("msg", "Invalid value")))
    logger.info("%s %s -> 400 request did not parse", request.method, request.url.path)
    return JSONResponse(status_code=400, content=error_body(ValidationError.default_message, errors))


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = "Route not found" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content=error_body(message), headers=getattr(exc, "headers", None))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("%s %s failed", request.method, request.url.path, exc_info=exc)
    body = error_body(InternalError.default_message)
    # only development builds echo the underlying error back to the caller
    if config.is_development():
        body["message"] = str(exc) or exc.__class__.__name__
        body["error"] = exc.__class__.__name__
    return JSONResponse(status_code=500, content=body)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
