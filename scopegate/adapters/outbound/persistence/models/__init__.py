# scopegate/adapters/outbound/persistence/models/__init__.py

"""
Data models module.

Exports every SQLAlchemy model so that metadata is complete
whenever the package is imported.
"""

from scopegate.adapters.outbound.persistence.models.base_model import Base
from scopegate.adapters.outbound.persistence.models.client_scopes import client_scopes
from scopegate.adapters.outbound.persistence.models.scope_model import Scope
from scopegate.adapters.outbound.persistence.models.client_model import Client

__all__ = [
    "Base",
    "Client",
    "Scope",
    "client_scopes",
]
