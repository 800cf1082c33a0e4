# scopegate/adapters/inbound/api/deps.py

"""
Dependencies for injection into API endpoints.

This module wires the request-time guards and the client-credentials
service into FastAPI through Depends().
"""

import logging
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from scopegate.adapters.inbound.api.route_policies import RoutePolicyTable, route_policies
from scopegate.adapters.outbound.persistence.database import get_db
from scopegate.application.use_cases.access_use_cases import TokenAuthenticator, ScopeAuthorizer
from scopegate.application.use_cases.client_auth_use_cases import AsyncClientAuthService
from scopegate.domain.models.access_model import AuthContext, RoutePolicy

# Configure logger
logger = logging.getLogger(__name__)

token_authenticator = TokenAuthenticator()
scope_authorizer = ScopeAuthorizer()

########################################################################
# Database Session Management
########################################################################

get_session = get_db


########################################################################
# Access Guards
########################################################################

def get_route_policy(request: Request) -> RoutePolicy:
    """
    Resolve the access policy of the matched route.

    The table comes from ``app.state.route_policies`` when the application
    provides one, otherwise the module table is used.
    """
    table: RoutePolicyTable = getattr(request.app.state, "route_policies", route_policies)
    route = request.scope.get("route")
    return table.lookup(getattr(route, "name", None))


async def access_guard(
        request: Request,
        policy: RoutePolicy = Depends(get_route_policy),
) -> AuthContext:
    """
    Authenticate, then authorize, the current request.

    Returns the immutable AuthContext handed to the endpoint. Public
    routes yield an anonymous context.

    Raises:
        InvalidCredentialsException: Missing, malformed, invalid or expired token
        PermissionDeniedException: Required scopes not granted
    """
    context = await token_authenticator.authenticate(request.headers.get("Authorization"), policy)
    return scope_authorizer.authorize(context, policy)


########################################################################
# Services
########################################################################

async def get_client_auth_service(db: AsyncSession = Depends(get_session)) -> AsyncClientAuthService:
    return AsyncClientAuthService(db)
