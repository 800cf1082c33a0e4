# scopegate/domain/services/auth_service.py

import re
import uuid
from datetime import datetime, timedelta
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple, Union

from scopegate.domain.exceptions import InvalidRequestException
from scopegate.domain.models.client_domain_model import Client

CLIENT_TOKEN_TYPE = "client"

_DIGITS = re.compile(r"[0-9]+")

EXPIRATION_FORMAT_DETAIL = '"expiration" must be a non-negative number of seconds'


class AuthService:
    """
    Domain service for authentication-related business logic.
    """

    @staticmethod
    def create_token_payload(
            subject: str,
            scopes: Iterable[str],
            issued_at: datetime,
            expires_delta: timedelta,
            token_type: str = CLIENT_TOKEN_TYPE,
            additional_claims: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Create a token payload with standard claims.

        Args:
            subject: The subject of the token (public client identifier)
            scopes: Scope names granted by the token
            issued_at: Issuance instant
            expires_delta: Token lifetime
            token_type: Type of token
            additional_claims: Additional claims to include in token

        Returns:
            Dict with all token claims
        """
        expire = issued_at + expires_delta

        payload = {
            "sub": str(subject),
            "scopes": list(scopes),
            "iat": int(issued_at.timestamp()),
            "exp": int(expire.timestamp()),
            "type": token_type,
            "jti": str(uuid.uuid4()),
        }

        if additional_claims:
            payload.update(additional_claims)

        return payload

    @staticmethod
    def parse_scope_string(raw: Optional[str]) -> Tuple[str, ...]:
        """Split a comma-separated scope string, trimming each entry."""
        if raw is None:
            return ()
        return tuple(part.strip() for part in raw.split(","))

    @staticmethod
    def reconcile_scopes(client: Client, requested: Iterable[str]) -> Tuple[str, ...]:
        """
        Check that every requested scope is assigned to the client.

        All-or-nothing: a single unassigned scope rejects the whole request.

        Returns:
            The requested names, duplicates collapsed, in request order

        Raises:
            InvalidRequestException: Empty request, empty names or
                scopes not assigned to the client
        """
        if isinstance(requested, str) or requested is None:
            raise InvalidRequestException(detail="Scopes must be a collection of scope names")

        names = tuple(dict.fromkeys(requested))
        if not names:
            raise InvalidRequestException(detail="At least one scope must be requested")
        if any(not isinstance(name, str) or not name for name in names):
            raise InvalidRequestException(detail="Scope names must be non-empty strings")

        if not set(names) <= client.scope_names:
            raise InvalidRequestException(detail="Some requested scopes are not valid for this client")

        return names

    @staticmethod
    def resolve_expires_in(
            explicit: Union[int, str, None],
            default_seconds: int,
            max_seconds: Optional[int] = None,
    ) -> int:
        """
        Resolve the token lifetime in seconds.

        An explicit value wins and must be a non-negative integer, given
        either as an int or as a string of digits, no larger than
        ``max_seconds`` when a cap is given. Otherwise (None or a blank
        string) the configured default applies.
        """
        if explicit is None:
            return default_seconds

        if isinstance(explicit, bool):
            raise InvalidRequestException(detail=EXPIRATION_FORMAT_DETAIL)

        if isinstance(explicit, str):
            value = explicit.strip()
            # A blank query parameter counts as not supplied
            if not value:
                return default_seconds
            if not _DIGITS.fullmatch(value):
                raise InvalidRequestException(detail=EXPIRATION_FORMAT_DETAIL)
            try:
                explicit = int(value)
            except ValueError:
                # Beyond the interpreter's digit limit for int conversion
                raise InvalidRequestException(detail=EXPIRATION_FORMAT_DETAIL)

        if not isinstance(explicit, int) or explicit < 0:
            raise InvalidRequestException(detail=EXPIRATION_FORMAT_DETAIL)

        if max_seconds is not None and explicit > max_seconds:
            raise InvalidRequestException(
                detail=f'"expiration" must not exceed {max_seconds} seconds'
            )

        return explicit

    @staticmethod
    def missing_scopes(required: Iterable[str], granted: Iterable[str]) -> FrozenSet[str]:
        """Scopes in ``required`` that ``granted`` does not cover."""
        return frozenset(required) - frozenset(granted)
