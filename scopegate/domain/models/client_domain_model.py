# scopegate/domain/models/client_domain_model.py

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple
from uuid import UUID


@dataclass(frozen=True)
class Scope:
    """Domain model for a scope."""
    id: UUID
    name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class Client:
    """Domain model for API client entity."""
    id: UUID
    client_id: str  # Public identifier, used as token subject
    client_secret: str  # Hashed secret
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    scopes: Tuple[Scope, ...] = field(default_factory=tuple)

    @property
    def is_active(self) -> bool:
        return self.deleted_at is None

    @property
    def scope_names(self) -> frozenset:
        return frozenset(scope.name for scope in self.scopes)
