# scopegate/application/use_cases/client_auth_use_cases.py

"""
Service for the client-credentials grant.

This module implements client validation, scope reconciliation and
token issuance for machine clients.
"""

import logging
from datetime import datetime
from typing import Iterable, Optional, Tuple, Union
from sqlalchemy.ext.asyncio import AsyncSession

from scopegate.adapters.configuration.config import settings
from scopegate.adapters.outbound.persistence.repositories.client_repository import client_repository
from scopegate.adapters.outbound.security.auth_client_manager import ClientAuthManager
from scopegate.adapters.outbound.security.secret_hasher import ClientSecretHasher
from scopegate.application.dtos.auth_dto import IssuedToken
from scopegate.application.ports.inbound import IClientAuthUseCase
from scopegate.application.ports.outbound import IClientRepository, ISecretHasher, ITokenService
from scopegate.domain.exceptions import InvalidCredentialsException, InvalidRequestException
from scopegate.domain.models.client_domain_model import Client
from scopegate.domain.services.auth_service import AuthService

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("scopegate.audit")

CLIENT_CREDENTIALS_GRANT = "client_credentials"


class AsyncClientAuthService(IClientAuthUseCase):
    """
    Service for the client-credentials grant.

    Store lookups are the only awaited I/O; hashing and signing run inline.
    Store failures propagate as DatabaseOperationException.
    """

    def __init__(
            self,
            db_session: AsyncSession,
            repository: IClientRepository = client_repository,
            hasher: ISecretHasher = ClientSecretHasher,
            token_service: ITokenService = ClientAuthManager,
            default_expires_in: Optional[int] = None,
            max_expires_in: Optional[int] = None,
    ):
        self.db_session = db_session
        self.repository = repository
        self.hasher = hasher
        self.token_service = token_service
        self.default_expires_in = (
            default_expires_in if default_expires_in is not None else settings.ACCESS_TOKEN_EXPIRE_SECONDS
        )
        self.max_expires_in = (
            max_expires_in if max_expires_in is not None else settings.MAX_ACCESS_TOKEN_EXPIRE_SECONDS
        )

    async def validate_client(self, client_id: str, client_secret: str) -> Client:
        """
        Look up the active client and verify its secret.

        Unknown identifiers and wrong secrets fail identically.

        Raises:
            InvalidCredentialsException: If the credentials are invalid
        """
        client = await self.repository.get_active_by_client_id(self.db_session, client_id)

        if client is None:
            # Keep the timing of an unknown identifier close to a wrong secret
            await self.hasher.dummy_verify()
            audit_logger.warning(f"Client authentication failed: client_id={client_id}")
            raise InvalidCredentialsException()

        if not await self.hasher.verify_secret(client_secret, client.client_secret):
            audit_logger.warning(f"Client authentication failed: client_id={client_id}")
            raise InvalidCredentialsException()

        audit_logger.info(f"Client authentication succeeded: client_id={client_id}")
        return client

    def reconcile_scopes(self, client: Client, requested_scopes: Iterable[str]) -> Tuple[str, ...]:
        try:
            return AuthService.reconcile_scopes(client, requested_scopes)
        except InvalidRequestException as e:
            logger.warning(f"Scope request rejected for client {client.client_id}: {e.detail}")
            raise

    async def issue_token(
            self,
            client: Client,
            scopes: Iterable[str],
            expires_in: Union[int, str, None] = None,
            now: Optional[datetime] = None,
    ) -> IssuedToken:
        """
        Sign an access token binding the client identifier and scopes.

        Args:
            client: Validated client
            scopes: Reconciled scope names
            expires_in: Explicit lifetime in seconds, defaults to configuration
            now: Issuance instant, defaults to the current time

        Returns:
            Token, granted scopes and lifetime in seconds
        """
        lifetime = AuthService.resolve_expires_in(expires_in, self.default_expires_in, self.max_expires_in)
        granted = list(scopes)

        token = await self.token_service.create_client_token(
            subject=client.client_id,
            scopes=granted,
            expires_in=lifetime,
            now=now,
        )

        logger.info(
            f"Token issued for client {client.client_id} "
            f"with scopes [{', '.join(granted)}], expires in {lifetime}s"
        )
        return IssuedToken(token=token, scopes=granted, expires_in=lifetime)

    async def client_credentials_grant(
            self,
            grant_type: Optional[str],
            client_id: Optional[str],
            client_secret: Optional[str],
            scopes: Optional[str],
            expires_in: Union[int, str, None] = None,
    ) -> IssuedToken:
        """
        Run the full grant: request checks, client validation, scope
        reconciliation and issuance, failing at the first problem.

        Args:
            grant_type: Must be "client_credentials"
            client_id: Public client identifier
            client_secret: Plain text client secret
            scopes: Comma-separated scope names
            expires_in: Optional lifetime override in seconds
        """
        if grant_type != CLIENT_CREDENTIALS_GRANT:
            raise InvalidRequestException(detail='Invalid grant_type. Expected "client_credentials".')

        missing = [
            name for name, value in (
                ("clientId", client_id),
                ("clientSecret", client_secret),
                ("scopes", scopes),
            ) if not value
        ]
        if missing:
            raise InvalidRequestException(detail=f"Missing required fields: {', '.join(missing)}")

        requested = AuthService.parse_scope_string(scopes)

        # Parse the override before touching the store
        lifetime = AuthService.resolve_expires_in(expires_in, self.default_expires_in, self.max_expires_in)

        client = await self.validate_client(client_id, client_secret)
        valid_scopes = self.reconcile_scopes(client, requested)
        return await self.issue_token(client, valid_scopes, expires_in=lifetime)
