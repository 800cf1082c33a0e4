# scopegate/adapters/outbound/persistence/models/scope_model.py

"""
Scope model.

A scope is a named permission (e.g. ``"read"``) that can be granted to
clients and requested when a token is issued.
"""

import uuid
from sqlalchemy import Column, String, DateTime, Uuid, func
from sqlalchemy.orm import relationship
from scopegate.adapters.outbound.persistence.models.base_model import Base
from scopegate.adapters.outbound.persistence.models.client_scopes import client_scopes


class Scope(Base):
    """
    Model representing a scope that can be assigned to clients.

    Attributes:
        id: Surrogate identifier
        name: Unique scope name, matched case-sensitively
        description: Optional free text
        created_at: Creation timestamp
        updated_at: Last update timestamp
        clients: Clients holding this scope
    """
    __tablename__ = "scopes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, unique=True, nullable=False, index=True)
    description = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # The database cascade removes association rows when a scope is deleted
    clients = relationship(
        "Client",
        secondary=client_scopes,
        back_populates="scopes",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Scope(name={self.name})>"
