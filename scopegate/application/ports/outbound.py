# scopegate/application/ports/outbound.py

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from scopegate.domain.models.client_domain_model import Client


class IClientRepository(ABC):
    """
    Credential store port consumed by the authentication core.

    The core only ever reads active clients; creating, updating and
    deleting records belongs to the store itself.
    """

    @abstractmethod
    async def get_active_by_client_id(self, db: Any, client_id: str) -> Optional[Client]:
        """Get the non-deleted client with this public identifier, scopes loaded."""
        pass


class ISecretHasher(ABC):
    """Secret hashing interface."""

    @abstractmethod
    async def hash_secret(self, secret: str) -> str:
        """Return a one-way hash of the secret."""
        pass

    @abstractmethod
    async def verify_secret(self, plain_secret: str, hashed_secret: str) -> bool:
        """Constant-time comparison of a secret with a stored hash."""
        pass

    @abstractmethod
    async def dummy_verify(self) -> bool:
        """Spend the time of a failed verification."""
        pass


class ITokenService(ABC):
    """Token handling interface."""

    @abstractmethod
    async def create_client_token(
            self, subject: str, scopes: Iterable[str], expires_in: int, now: Optional[datetime] = None
    ) -> str:
        """Create a signed access token."""
        pass

    @abstractmethod
    async def verify_client_token(self, token: str, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Verify and decode an access token."""
        pass
