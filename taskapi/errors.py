# taskapi/errors.py
"""Exception handlers that turn failures into the JSON error envelope."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskapi.repository import StoreError, TaskNotFoundError

logger = logging.getLogger(__name__)


def error_response(error: str, status_code: int, details: Optional[str] = None) -> JSONResponse:
    """Build an ``{error, details?}`` response."""
    content = {"error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def _describe_validation(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


def register_error_handlers(app: FastAPI) -> None:
    """Register the catch-all handlers on the app.

    Unmatched paths and methods both answer 404 "Route not found"; anything
    not handled elsewhere becomes a 500 carrying the exception text. Call it
    before adding CORSMiddleware so those 500s still get CORS headers.
    """

    @app.exception_handler(TaskNotFoundError)
    async def task_not_found(request: Request, exc: TaskNotFoundError):
        return error_response("Task not found", 404)

    @app.exception_handler(StoreError)
    async def store_error(request: Request, exc: StoreError):
        return error_response(exc.message, 500, exc.details)

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        return error_response("Invalid request", 422, _describe_validation(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return error_response("Route not found", 404)
        return error_response(str(exc.detail), exc.status_code)

    @app.middleware("http")
    async def unhandled(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return error_response("Something went wrong!", 500, str(exc))
