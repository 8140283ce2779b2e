import inspect
import logging
from typing import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)

ErrorHandler = Callable[[Request, Exception], Awaitable[Response]]


def _log_internal_error(request: Request, exc: Exception) -> None:
    logger.error(f"Unhandled exception in {request.method} {request.url.path}: {str(exc)}", exc_info=exc)


async def plain_error_handler(request: Request, exc: Exception) -> Response:
    """Write application errors as plain text, anything else as an empty 500."""
    if isinstance(exc, StarletteHTTPException):
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)
    _log_internal_error(request, exc)
    return Response(status_code=500)


async def json_error_handler(request: Request, exc: Exception) -> Response:
    """Write application errors as ``{"status": detail, "code": status_code}``."""
    if isinstance(exc, StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"status": exc.detail, "code": exc.status_code},
            headers=exc.headers,
        )
    _log_internal_error(request, exc)
    return Response(status_code=500)


def use_error_handler(app: FastAPI, handler: ErrorHandler) -> None:
    """Install ``handler`` as the app-wide translation hook for errors."""
    app.add_exception_handler(StarletteHTTPException, handler)
    app.add_exception_handler(Exception, handler)


async def render_error(request: Request, exc: Exception) -> Response:
    """Render ``exc`` with the handler the app registered for its type.

    Used by middleware that short-circuits outside the router, where raised
    exceptions would not reach the app's exception handlers.
    """
    app = request.scope.get("app")
    handlers = getattr(app, "exception_handlers", {})
    handler = None
    if isinstance(exc, StarletteHTTPException):
        handler = handlers.get(exc.status_code)
    if handler is None:
        for cls in type(exc).__mro__:
            handler = handlers.get(cls)
            if handler is not None:
                break
    if handler is None:
        handler = plain_error_handler
    if inspect.iscoroutinefunction(handler):
        return await handler(request, exc)
    return await run_in_threadpool(handler, request, exc)
