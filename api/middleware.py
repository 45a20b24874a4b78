"""
Global middleware.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

_AUTH_PREFIX = "/api/v1/auth"


def register_middleware(app: FastAPI) -> None:
    """Attach auth-response hardening and request logging."""

    @app.middleware("http")
    async def auth_response_guard(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start

        # responses under the auth prefix may carry access tokens
        if request.url.path.startswith(_AUTH_PREFIX):
            response.headers["Cache-Control"] = "no-store"
            response.headers["Pragma"] = "no-cache"

        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level, "%s %s -> %d (%.3fs)",
            request.method, request.url.path, response.status_code, elapsed,
        )
        return response
