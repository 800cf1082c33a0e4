# scopegate/application/use_cases/__init__.py

"""
Application service module.

This package contains the application services that implement the
client-credentials grant and the request-time guards.
"""

from scopegate.application.use_cases.client_auth_use_cases import AsyncClientAuthService
from scopegate.application.use_cases.access_use_cases import TokenAuthenticator, ScopeAuthorizer

__all__ = [
    "AsyncClientAuthService",
    "TokenAuthenticator",
    "ScopeAuthorizer",
]
