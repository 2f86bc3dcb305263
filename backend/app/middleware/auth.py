"""API key authentication middleware."""

from __future__ import annotations

import logging
import secrets

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ..config import get_settings

API_KEY_HEADER = "X-API-Key"

logger = logging.getLogger("packing_list_parser.api.auth")


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Require the configured API key on every non-public path."""

    PUBLIC_PATHS = {"/", "/health", "/docs", "/openapi.json", "/redoc"}

    async def dispatch(self, request: Request, call_next) -> Response:
        settings = get_settings()

        # CORS preflight, public paths and unauthenticated local setups pass through
        if (
            request.method == "OPTIONS"
            or request.url.path in self.PUBLIC_PATHS
            or not settings.api_key
        ):
            return await call_next(request)

        api_key = request.headers.get(API_KEY_HEADER)
        if not api_key or not secrets.compare_digest(api_key, settings.api_key):
            logger.warning(
                "Rejected %s %s: invalid or missing API key", request.method, request.url.path
            )
            return JSONResponse(
                status_code=401,
                content={"detail": "Invalid or missing API key"},
            )

        return await call_next(request)
