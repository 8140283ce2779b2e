import logging
import time
from http import HTTPStatus
from typing import Awaitable, Callable, Iterable, Sequence

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.middleware.gzip import GZipMiddleware
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

from .errors import render_error


logger = logging.getLogger(__name__)

CallNext = Callable[[Request], Awaitable[Response]]
Dispatch = Callable[[Request, CallNext], Awaitable[Response]]
DisallowList = Sequence[str]


def http_middleware(dispatch: Dispatch) -> Middleware:
    """Wrap an ``async (request, call_next)`` function as a middleware definition."""
    return Middleware(BaseHTTPMiddleware, dispatch=dispatch)


def use(app: FastAPI, *middleware: Middleware) -> None:
    """Install middleware definitions; the first one listed runs outermost."""
    # add_middleware prepends to the stack
    for m in reversed(middleware):
        app.add_middleware(m.cls, *m.args, **m.kwargs)


def cors_any() -> Middleware:
    """Allow cross-origin access from any origin.

    Errors raised downstream are rendered here so that 500 responses carry
    the header too.
    """

    async def add_cors_headers(request: Request, call_next: CallNext) -> Response:
        try:
            response = await call_next(request)
        except Exception as exc:
            response = await render_error(request, exc)
        response.headers["Access-Control-Allow-Origin"] = "*"
        return response

    return http_middleware(add_cors_headers)


def _status_text(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""


def disallow_in_path(disallowed: DisallowList, code: int) -> Middleware:
    """Reject requests whose path contains any of ``disallowed`` with ``code``.

    Entries are matched as plain substrings, so ``"admin"`` also blocks
    ``/administrator``. The rejection goes through the app's error handler
    with the standard reason phrase as its message.
    """
    entries = tuple(disallowed)
    reason = _status_text(code)

    async def reject_disallowed(request: Request, call_next: CallNext) -> Response:
        path = request.scope["path"]
        for text in entries:
            if text in path:
                logger.info(f"Blocked {request.method} {path}: matched {text!r}")
                return await render_error(request, HTTPException(status_code=code, detail=reason))
        return await call_next(request)

    return http_middleware(reject_disallowed)


def skip_compression(path: str, types: Iterable[str]) -> bool:
    """True unless ``path`` ends with one of the suffixes in ``types``."""
    return not any(path.endswith(ext) for ext in types)


class SuffixGZipMiddleware:
    """Gzip responses only for paths ending with one of ``types``."""

    def __init__(self, app: ASGIApp, level: int = 5, types: Sequence[str] = (), minimum_size: int = 0) -> None:
        self.app = app
        self.types = tuple(types)
        self.gzip = GZipMiddleware(app, minimum_size=minimum_size, compresslevel=level)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and not skip_compression(scope["path"], self.types):
            await self.gzip(scope, receive, send)
            return
        await self.app(scope, receive, send)


def gzip_middleware(level: int, *types: str) -> Middleware:
    """Compress responses for the given file extensions, e.g. ``".js", ".css"``.

    5 is a good level.
    """
    return Middleware(SuffixGZipMiddleware, level=level, types=types)


def request_logger(slow_seconds: float = 1.0) -> Middleware:
    """Log failed or slow requests, one record each.

    Exceptions raised downstream are logged with their traceback and re-raised.
    """

    async def log_request(request: Request, call_next: CallNext) -> Response:
        started = time.perf_counter()
        method, path = request.method, request.scope["path"]
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(f"{method} {path} raised after {time.perf_counter() - started:.3f}s")
            raise

        elapsed = time.perf_counter() - started
        if response.status_code >= 400 or elapsed > slow_seconds:
            logger.info(
                f"{method} {path} -> {response.status_code} in {elapsed:.3f}s",
                extra={"method": method, "path": path, "status_code": response.status_code, "elapsed": elapsed},
            )
        return response

    return http_middleware(log_request)
