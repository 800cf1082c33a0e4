# scopegate/adapters/outbound/persistence/repositories/client_repository.py

"""
Repository for client operations.

``get_active_by_client_id`` is the only operation the authentication core
uses. The remaining methods belong to the credential store itself and
serve seeding, maintenance scripts and tests.
"""

import secrets
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from scopegate.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from scopegate.adapters.outbound.persistence.models import Client, Scope
from scopegate.adapters.outbound.security.secret_hasher import ClientSecretHasher
from scopegate.application.ports.outbound import IClientRepository
from scopegate.domain.models.client_domain_model import Client as DomainClient, Scope as DomainScope
from scopegate.domain.exceptions import (
    ResourceNotFoundException,
    DatabaseOperationException,
)


class AsyncClientCRUD(AsyncCRUDBase[Client], IClientRepository):
    """
    Async repository for the Client entity.

    Extends AsyncCRUDBase with lookup by public identifier, credential
    generation and soft deletion.
    """

    async def get_active_by_client_id(self, db: AsyncSession, client_id: str) -> Optional[DomainClient]:
        """
        Find a non-deleted client by client_id, with its scopes.

        Args:
            db: Async database session
            client_id: Public client identifier

        Returns:
            Domain client or None if no active client matches

        Raises:
            DatabaseOperationException: In case of database error
        """
        try:
            query = (
                select(Client)
                .options(selectinload(Client.scopes))
                .where(Client.client_id == client_id, Client.deleted_at.is_(None))
            )
            result = await db.execute(query)
            client = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching client by client_id '{client_id}': {str(e)}")
            raise DatabaseOperationException(original_error=e)

        return self.to_domain(client) if client is not None else None

    async def create_with_credentials(
            self,
            db: AsyncSession,
            scope_names: Iterable[str] = (),
            description: Optional[str] = None,
            client_id: Optional[str] = None,
            client_secret: Optional[str] = None,
    ) -> Dict[str, str]:
        """
        Create a new client, generating credentials that are not supplied.

        Args:
            db: Async database session
            scope_names: Names of existing scopes to assign
            description: Optional free text
            client_id: Public identifier, generated when omitted
            client_secret: Plain secret, generated when omitted

        Returns:
            Dictionary with client_id and the plain client_secret

        Raises:
            ResourceNotFoundException: If a scope name does not exist
            ResourceAlreadyExistsException: If client_id is taken by an active client
            DatabaseOperationException: In case of database error
        """
        client_id = client_id or secrets.token_urlsafe(16)
        client_secret_plain = client_secret or secrets.token_urlsafe(32)

        scopes = await self._load_scopes(db, scope_names)

        client = Client(
            client_id=client_id,
            client_secret=await ClientSecretHasher.hash_secret(client_secret_plain),
            description=description,
            scopes=scopes,
        )
        await self.add(db, client)

        # This is the only time the secret is exposed
        return {
            "client_id": client_id,
            "client_secret": client_secret_plain,
        }

    async def soft_delete(self, db: AsyncSession, client_id: str) -> None:
        """
        Mark an active client as deleted.

        Only the tombstone is written: scope rows and associations stay.

        Raises:
            ResourceNotFoundException: If no active client matches
        """
        try:
            query = select(Client).where(Client.client_id == client_id, Client.deleted_at.is_(None))
            result = await db.execute(query)
            client = result.scalar_one_or_none()
            if client is None:
                raise ResourceNotFoundException(detail="Client not found", resource_id=client_id)

            client.deleted_at = datetime.now(timezone.utc)
            await db.commit()
            self.logger.info(f"Client soft-deleted: {client_id}")

        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error deleting client '{client_id}': {str(e)}")
            raise DatabaseOperationException(original_error=e)

    async def _load_scopes(self, db: AsyncSession, scope_names: Iterable[str]) -> list:
        names = list(dict.fromkeys(scope_names))
        if not names:
            return []
        try:
            result = await db.execute(select(Scope).where(Scope.name.in_(names)))
            scopes = list(result.scalars().all())
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading scopes {names}: {str(e)}")
            raise DatabaseOperationException(original_error=e)

        unknown = set(names) - {scope.name for scope in scopes}
        if unknown:
            raise ResourceNotFoundException(detail=f"Unknown scopes: {', '.join(sorted(unknown))}")
        return scopes

    def to_domain(self, db_model: Client) -> DomainClient:
        """
        Convert database model to domain model.
        """
        return DomainClient(
            id=db_model.id,
            client_id=db_model.client_id,
            client_secret=db_model.client_secret,
            description=db_model.description,
            created_at=db_model.created_at,
            updated_at=db_model.updated_at,
            deleted_at=db_model.deleted_at,
            scopes=tuple(
                DomainScope(id=scope.id, name=scope.name, description=scope.description)
                for scope in db_model.scopes
            ),
        )


# Public instance to be used by use cases
client_repository = AsyncClientCRUD(Client)
