# scopegate/adapters/outbound/persistence/models/client_scopes.py

"""
Association table between clients and scopes.

Deletion rules are deliberately asymmetric:

* deleting a scope row removes its association rows (``ON DELETE CASCADE``
  on ``scope_id``), the clients themselves are untouched;
* clients are only ever soft-deleted (``clients.deleted_at``), which leaves
  both the association rows and the scope rows in place. The cascade on
  ``client_id`` only fires for a hard delete, which the store never issues.
"""

from sqlalchemy import Table, Column, ForeignKey, Uuid
from scopegate.adapters.outbound.persistence.models.base_model import Base

client_scopes = Table(
    "client_scopes",
    Base.metadata,
    Column(
        "client_id",
        Uuid,
        ForeignKey("clients.id", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
        index=True,
    ),
    Column(
        "scope_id",
        Uuid,
        ForeignKey("scopes.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
    comment="Many-to-many association between clients and scopes",
)
