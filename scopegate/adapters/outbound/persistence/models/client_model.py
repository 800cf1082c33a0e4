# scopegate/adapters/outbound/persistence/models/client_model.py

"""
Client model for API authentication.

This module defines the Client model representing external applications
authorized to obtain access tokens through the client-credentials grant.
"""

import uuid
from sqlalchemy import Column, String, DateTime, Uuid, Index, func
from sqlalchemy.orm import relationship
from scopegate.adapters.outbound.persistence.models.base_model import Base
from scopegate.adapters.outbound.persistence.models.client_scopes import client_scopes


class Client(Base):
    """
    Model representing a client (application/partner) that accesses the API.

    Attributes:
        id: Surrogate identifier
        client_id: Public client identifier (used as the token subject)
        client_secret: Hash of the client secret, never the plain text
        description: Optional free text
        created_at: Creation timestamp
        updated_at: Last update timestamp
        deleted_at: Soft-delete tombstone, excluded from active lookups once set
        scopes: Scopes assigned to the client
    """
    __tablename__ = "clients"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    client_id = Column(String, nullable=False)
    client_secret = Column(String, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    scopes = relationship(
        "Scope",
        secondary=client_scopes,
        back_populates="clients",
        lazy="selectin",
    )

    # client_id is unique among clients that are not soft-deleted
    __table_args__ = (
        Index(
            "uq_clients_client_id_active",
            "client_id",
            unique=True,
            postgresql_where=deleted_at.is_(None),
            sqlite_where=deleted_at.is_(None),
        ),
    )

    @property
    def is_active(self) -> bool:
        return self.deleted_at is None

    def __repr__(self) -> str:
        """String representation of the Client object."""
        return f"<Client(client_id={self.client_id}, active={self.is_active})>"
