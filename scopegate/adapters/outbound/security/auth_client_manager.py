# scopegate/adapters/outbound/security/auth_client_manager.py

import logging
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from jose import jwt, JWTError

from scopegate.adapters.configuration.config import settings
from scopegate.application.ports.outbound import ITokenService
from scopegate.domain.exceptions import InvalidCredentialsException
from scopegate.domain.services.auth_service import AuthService, CLIENT_TOKEN_TYPE

logger = logging.getLogger(__name__)

SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM

INVALID_TOKEN_DETAIL = "Invalid or expired token"


class ClientAuthManager(ITokenService):
    """
    Signs and verifies JWT access tokens of clients (authorized applications).
    """

    @classmethod
    async def create_client_token(
            cls,
            subject: str,
            scopes: Iterable[str],
            expires_in: int,
            now: Optional[datetime] = None,
    ) -> str:
        """
        Create a JWT with 'sub' equal to subject, the granted scopes and type "client".
        """
        issued_at = now or datetime.now(timezone.utc)
        payload = AuthService.create_token_payload(
            subject=subject,
            scopes=scopes,
            issued_at=issued_at,
            expires_delta=timedelta(seconds=expires_in),
        )
        return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)

    @classmethod
    async def verify_client_token(cls, token: str, now: Optional[datetime] = None) -> dict:
        """
        Decode and validate a client JWT.

        The token is valid strictly before its 'exp' instant. Every failure
        raises the same InvalidCredentialsException; the cause is only logged.
        """
        try:
            # Expiry is checked below so that 'exp' itself already counts as expired
            payload = jwt.decode(
                token,
                SECRET_KEY,
                algorithms=[ALGORITHM],
                options={"verify_exp": False},
            )
        except JWTError as e:
            logger.warning(f"Client token rejected: {type(e).__name__}: {e}")
            raise InvalidCredentialsException(detail=INVALID_TOKEN_DETAIL)

        if payload.get("type") != CLIENT_TOKEN_TYPE:
            logger.warning("Client token rejected: incorrect type")
            raise InvalidCredentialsException(detail=INVALID_TOKEN_DETAIL)

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            logger.warning("Client token rejected: 'sub' missing")
            raise InvalidCredentialsException(detail=INVALID_TOKEN_DETAIL)

        expires_at = payload.get("exp")
        if isinstance(expires_at, bool) or not isinstance(expires_at, int):
            logger.warning("Client token rejected: 'exp' missing or not an integer")
            raise InvalidCredentialsException(detail=INVALID_TOKEN_DETAIL)

        current = int((now or datetime.now(timezone.utc)).timestamp())
        if current >= expires_at:
            logger.warning(f"Client token rejected: expired for subject {subject}")
            raise InvalidCredentialsException(detail=INVALID_TOKEN_DETAIL)

        return payload
