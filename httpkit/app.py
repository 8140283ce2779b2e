import logging
from datetime import datetime
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import PlainTextResponse

from httpkit import __version__
from httpkit.core.auth import UserPass, basic_auth
from httpkit.core.config import Config
from httpkit.core.errors import json_error_handler, plain_error_handler, use_error_handler
from httpkit.core.middleware import (
    DisallowList,
    cors_any,
    disallow_in_path,
    gzip_middleware,
    request_logger,
    use,
)

logger = logging.getLogger(__name__)

DEFAULT_DISALLOWED = (".env", ".git", "wp-admin")

STATIC_FILES = {
    "app.js": ("application/javascript", "console.log('httpkit');\n" * 64),
    "site.css": ("text/css", "body { margin: 0; }\n" * 64),
    "index.html": ("text/html", "<!doctype html><title>httpkit</title>\n" * 64),
}


def create_app(
    users: Optional[UserPass] = None,
    disallowed: DisallowList = DEFAULT_DISALLOWED,
    blocked_code: int = 404,
    json_errors: bool = True,
    gzip_level: int = 5,
) -> FastAPI:
    """Build the example service with every helper installed.

    ``/private`` requires basic auth against ``users``; without users it is
    not registered.
    """
    app = FastAPI(title="httpkit example", version=__version__)

    use_error_handler(app, json_error_handler if json_errors else plain_error_handler)
    use(
        app,
        request_logger(),
        cors_any(),
        disallow_in_path(disallowed, blocked_code),
        gzip_middleware(gzip_level, ".js", ".css"),
    )

    @app.get("/")
    async def root():
        """Return basic service information."""
        return {
            "service": "httpkit example",
            "version": __version__,
            "environment": Config.ENVIRONMENT,
            "timestamp": datetime.now().isoformat(),
        }

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    @app.get("/static/{name}")
    async def static_file(name: str):
        if name not in STATIC_FILES:
            raise HTTPException(status_code=404, detail=f"{name} not found")
        media_type, body = STATIC_FILES[name]
        return PlainTextResponse(body, media_type=media_type)

    if users:
        @app.get("/private")
        async def private(username: str = Depends(basic_auth(users))):
            return {"user": username}

    logger.info(f"Created app: blocking {list(disallowed)} with {blocked_code}, basic auth {'on' if users else 'off'}")
    return app
