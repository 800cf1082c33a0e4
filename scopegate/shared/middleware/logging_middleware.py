# scopegate/shared/middleware/logging_middleware.py

"""
Middleware for HTTP request logging.

One line per request: method, path, matched route with the access policy
it was served under, status and timing. The authenticated subject is
logged by the access guard, and request bodies (client secrets) never are.
"""

import time
import logging
from typing import Optional
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from scopegate.adapters.configuration.config import settings
from scopegate.adapters.inbound.api.route_policies import route_policies
from scopegate.domain.models.access_model import RoutePolicy

# Configure logger
logger = logging.getLogger(__name__)


def describe_policy(policy: RoutePolicy) -> str:
    """Short label of a route policy for log lines."""
    if policy.public:
        return "public"
    if policy.required_scopes:
        return f"scopes={','.join(sorted(policy.required_scopes))}"
    return "authenticated"


def matched_route_name(request: Request) -> Optional[str]:
    # Set by the router once the path matched
    return getattr(request.scope.get("route"), "name", None)


class AsyncRequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for request logging.
    """

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        route_name = matched_route_name(request)
        if route_name is None:
            access = "unrouted"
        else:
            table = getattr(request.app.state, "route_policies", route_policies)
            access = describe_policy(table.lookup(route_name))

        message = (
            f"{request.method} {request.url.path} -> {response.status_code} | "
            f"Route: {route_name or 'N/A'} ({access})"
        )
        if settings.ENVIRONMENT != "production":
            message += f" | Time: {process_time:.4f}s"
        logger.info(message)

        return response
