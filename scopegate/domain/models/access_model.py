# scopegate/domain/models/access_model.py

"""
Request-time access values.

``RoutePolicy`` is what an operation declares about itself, ``AuthContext``
is what the authentication stage hands to the authorization stage and then
to the handler. Both are immutable.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Optional


@dataclass(frozen=True)
class RoutePolicy:
    """
    Access declaration for one operation.

    Attributes:
        public: Skip token authentication entirely
        required_scopes: Scopes the caller must hold; empty means none
    """
    public: bool = False
    required_scopes: FrozenSet[str] = frozenset()

    @classmethod
    def build(cls, public: bool = False, scopes: Iterable[str] = ()) -> "RoutePolicy":
        return cls(public=public, required_scopes=frozenset(scopes))


@dataclass(frozen=True)
class AuthContext:
    """
    Identity attached to a request after authentication.

    ``scopes`` is None when the token carried no usable scopes claim,
    which the scope authorizer treats as "no principal scopes".
    """
    subject: Optional[str] = None
    scopes: Optional[FrozenSet[str]] = None
    claims: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def is_authenticated(self) -> bool:
        return self.subject is not None

    @classmethod
    def anonymous(cls) -> "AuthContext":
        return cls()
