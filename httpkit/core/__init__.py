"""Cross-cutting HTTP helpers for FastAPI applications.

Each helper wraps one HTTP concern (errors, CORS, basic auth, path
blocklists, port selection, compression) and returns something the
framework already knows how to consume: a middleware definition, an
exception handler or a dependency.
"""

from .auth import UserPass, basic_auth, check_credentials
from .config import Config, env_port_or, split_port
from .errors import json_error_handler, plain_error_handler, render_error, use_error_handler
from .middleware import (
    DisallowList,
    SuffixGZipMiddleware,
    cors_any,
    disallow_in_path,
    gzip_middleware,
    http_middleware,
    request_logger,
    skip_compression,
    use,
)

__all__ = [
    "Config",
    "DisallowList",
    "SuffixGZipMiddleware",
    "UserPass",
    "basic_auth",
    "check_credentials",
    "cors_any",
    "disallow_in_path",
    "env_port_or",
    "gzip_middleware",
    "http_middleware",
    "json_error_handler",
    "plain_error_handler",
    "render_error",
    "request_logger",
    "skip_compression",
    "split_port",
    "use",
    "use_error_handler",
]
