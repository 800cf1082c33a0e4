# scopegate/adapters/outbound/persistence/repositories/__init__.py

"""
Credential store repositories.

Exports the repository classes and their shared instances.
"""

from scopegate.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from scopegate.adapters.outbound.persistence.repositories.client_repository import (
    AsyncClientCRUD,
    client_repository,
)
from scopegate.adapters.outbound.persistence.repositories.scope_repository import (
    AsyncScopeCRUD,
    scope_repository,
)

__all__ = [
    # Classes
    "AsyncCRUDBase",
    "AsyncClientCRUD",
    "AsyncScopeCRUD",

    # Instances
    "client_repository",
    "scope_repository",
]
