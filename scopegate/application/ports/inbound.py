# scopegate/application/ports/inbound.py

from abc import ABC, abstractmethod
from typing import Iterable, Optional, Tuple, Union

from scopegate.application.dtos.auth_dto import IssuedToken
from scopegate.domain.models.client_domain_model import Client


class IClientAuthUseCase(ABC):
    """Interface for client-credentials use cases."""

    @abstractmethod
    async def validate_client(self, client_id: str, client_secret: str) -> Client:
        """Check the client credentials and return the client."""
        pass

    @abstractmethod
    def reconcile_scopes(self, client: Client, requested_scopes: Iterable[str]) -> Tuple[str, ...]:
        """Ensure the requested scopes are all assigned to the client."""
        pass

    @abstractmethod
    async def issue_token(self, client: Client, scopes: Iterable[str],
                          expires_in: Union[int, str, None] = None) -> IssuedToken:
        """Sign an access token for the client."""
        pass

    @abstractmethod
    async def client_credentials_grant(self, grant_type: Optional[str], client_id: Optional[str],
                                       client_secret: Optional[str], scopes: Optional[str],
                                       expires_in: Union[int, str, None] = None) -> IssuedToken:
        """Run the whole client-credentials grant."""
        pass
