"""Error-envelope handlers and request logging middleware."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from ulid import ULID

from tasktrack.core.exceptions import TaskTrackError
from tasktrack.core.logging import add_request_context, clear_request_context, get_logger
from tasktrack.core.schemas import ErrorEnvelope

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    """Build a JSON response carrying the error envelope."""
    envelope = ErrorEnvelope(error_message=message)
    return JSONResponse(status_code=status_code, content=envelope.model_dump(by_alias=True), headers=headers)


async def tasktrack_error_handler(request: Request, exc: TaskTrackError) -> JSONResponse:
    """Map TaskTrackError subclasses to their HTTP status."""
    if exc.status_code >= 500:
        logger.error("request.failed", path=request.url.path, error_type=type(exc).__name__, error=exc.message)
    else:
        logger.info("request.rejected", path=request.url.path, error_type=type(exc).__name__, error=exc.message)
    return error_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map request parsing/validation failures to 400."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        problems.append(f"{location}: {error.get('msg', 'invalid')}" if location else str(error.get("msg")))
    message = "; ".join(problems) or "Invalid request"
    logger.info("request.invalid", path=request.url.path, error=message)
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap framework HTTP errors (404, 405, ...) in the error envelope."""
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def database_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Map SQLAlchemy errors that escaped the record store to 500."""
    logger.error("request.database_error", path=request.url.path, error=str(exc))
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler so a failing request never takes the service down."""
    logger.exception("request.unhandled_error", path=request.url.path, error_type=type(exc).__name__)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def add_error_handlers(app: FastAPI) -> None:
    """Register error-envelope handlers on the app."""
    app.add_exception_handler(TaskTrackError, tasktrack_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


def add_logging_middleware(app: FastAPI) -> None:
    """Log every request with a ULID request id bound into the logging context."""

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(ULID())
        clear_request_context()
        add_request_context(request_id=request_id)

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("http.request_failed", method=request.method, path=request.url.path)
            raise
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "http.request",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        clear_request_context()
        return response
