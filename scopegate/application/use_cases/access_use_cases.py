# scopegate/application/use_cases/access_use_cases.py

"""
Request-time guards.

``TokenAuthenticator`` turns the Authorization header into an
``AuthContext``; ``ScopeAuthorizer`` then checks that context against the
scopes the operation requires. Both take the operation's ``RoutePolicy``
explicitly and neither touches the request object.
"""

import logging
from datetime import datetime
from typing import Optional

from scopegate.adapters.outbound.security.auth_client_manager import ClientAuthManager
from scopegate.application.ports.outbound import ITokenService
from scopegate.domain.exceptions import InvalidCredentialsException, PermissionDeniedException
from scopegate.domain.models.access_model import AuthContext, RoutePolicy
from scopegate.domain.services.auth_service import AuthService

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"
MISSING_TOKEN_DETAIL = "Token is missing or invalid"
ACCESS_DENIED_DETAIL = "Access denied"


class TokenAuthenticator:
    """Authentication stage: public bypass or bearer token verification."""

    def __init__(self, token_service: ITokenService = ClientAuthManager):
        self.token_service = token_service

    @staticmethod
    def extract_bearer_token(authorization: Optional[str]) -> str:
        """
        Return the token of an ``Authorization: Bearer <token>`` header.

        The scheme is case-sensitive and the header must hold exactly the
        scheme and the token separated by one space.

        Raises:
            InvalidCredentialsException: For any other shape
        """
        if not authorization or not isinstance(authorization, str):
            logger.warning("Authorization header is missing")
            raise InvalidCredentialsException(detail=MISSING_TOKEN_DETAIL)

        parts = authorization.split(" ")
        if len(parts) != 2 or parts[0] != BEARER_SCHEME or not parts[1]:
            logger.warning("Authorization header does not contain a Bearer token")
            raise InvalidCredentialsException(detail=MISSING_TOKEN_DETAIL)

        return parts[1]

    async def authenticate(
            self,
            authorization: Optional[str],
            policy: RoutePolicy,
            now: Optional[datetime] = None,
    ) -> AuthContext:
        if policy.public:
            return AuthContext.anonymous()

        token = self.extract_bearer_token(authorization)
        payload = await self.token_service.verify_client_token(token, now=now)

        raw_scopes = payload.get("scopes")
        scopes = None
        if isinstance(raw_scopes, list) and all(isinstance(s, str) for s in raw_scopes):
            scopes = frozenset(raw_scopes)

        logger.debug(f"Token validated for client {payload['sub']}")
        return AuthContext(subject=payload["sub"], scopes=scopes, claims=dict(payload))


class ScopeAuthorizer:
    """Authorization stage: required scopes against granted scopes."""

    def authorize(self, context: Optional[AuthContext], policy: RoutePolicy) -> AuthContext:
        required = policy.required_scopes
        if not required:
            return context if context is not None else AuthContext.anonymous()

        if context is None or not context.is_authenticated or not context.scopes:
            logger.warning(f"Access denied: no scopes on principal for required [{', '.join(sorted(required))}]")
            raise PermissionDeniedException(detail=ACCESS_DENIED_DETAIL)

        missing = AuthService.missing_scopes(required, context.scopes)
        if missing:
            logger.warning(
                f"Access denied for client {context.subject}: "
                f"missing scopes [{', '.join(sorted(missing))}]"
            )
            raise PermissionDeniedException(detail=ACCESS_DENIED_DETAIL)

        return context
