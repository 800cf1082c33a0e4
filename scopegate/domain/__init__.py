# scopegate/domain/__init__.py

"""
Domain components of the application.

Exports the domain exceptions for easier imports.
"""

from scopegate.domain.exceptions import (
    DomainException,
    InvalidRequestException,
    InvalidCredentialsException,
    PermissionDeniedException,
    DatabaseOperationException,
    ResourceNotFoundException,
    ResourceAlreadyExistsException,
)

__all__ = [
    "DomainException",
    "InvalidRequestException",
    "InvalidCredentialsException",
    "PermissionDeniedException",
    "DatabaseOperationException",
    "ResourceNotFoundException",
    "ResourceAlreadyExistsException",
]
