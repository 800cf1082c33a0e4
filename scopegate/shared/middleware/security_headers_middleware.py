# scopegate/shared/middleware/security_headers_middleware.py

"""
Middleware for adding HTTP security headers.

Token responses must never be cached, and API responses get a restrictive
content policy. Documentation routes keep the defaults so Swagger UI loads.
"""

import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from scopegate.adapters.configuration.config import settings

# Configure logger
logger = logging.getLogger(__name__)

DOCS_PATHS = ("/docs", "/redoc", "/openapi.json")


class AsyncSecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds security headers to all HTTP responses.
    """

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        path = request.url.path
        is_docs_route = path == "/" or path.startswith(DOCS_PATHS)

        if not is_docs_route:
            # Prevents MIME-type sniffing
            response.headers["X-Content-Type-Options"] = "nosniff"

            # Prevents clickjacking
            response.headers["X-Frame-Options"] = "DENY"

            response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"
            response.headers["Referrer-Policy"] = "no-referrer"

            # Bearer tokens must not end up in caches
            response.headers["Cache-Control"] = "no-store"
            response.headers["Pragma"] = "no-cache"

        if settings.ENVIRONMENT == "production":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response
