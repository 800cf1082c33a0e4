# scopegate/domain/exceptions.py

"""
Application domain exceptions.

These exceptions are plain Python exceptions with no HTTP types. Each one
carries an ``internal_code`` that the exception middleware maps to a status
code, so the domain never depends on the web framework.
"""

from typing import Any, Optional


class DomainException(Exception):
    """
    Base exception for every domain error.

    Attributes:
        detail: Message that is safe to show to the caller
        internal_code: Stable code used to pick the HTTP status
    """

    internal_code = "DOMAIN_ERROR"

    def __init__(self, detail: Any = None):
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return str(self.detail)


class InvalidRequestException(DomainException):
    """Malformed grant type, bad scope request or unparseable expiry."""

    internal_code = "INVALID_REQUEST"

    def __init__(self, detail: str = "Invalid request"):
        super().__init__(detail)


class InvalidCredentialsException(DomainException):
    """
    Authentication failed.

    The message stays generic on purpose: callers must not learn whether
    the client identifier, the secret or the token was at fault.
    """

    internal_code = "INVALID_CREDENTIALS"

    def __init__(self, detail: str = "Invalid client credentials"):
        super().__init__(detail)


class PermissionDeniedException(DomainException):
    """Authenticated, but the granted scopes do not cover the operation."""

    internal_code = "PERMISSION_DENIED"

    def __init__(self, detail: str = "Access denied"):
        super().__init__(detail)


class DatabaseOperationException(DomainException):
    """
    Unexpected failure of the credential store.

    The original error is kept for logging only and never ends up in the
    message returned to the caller.
    """

    internal_code = "DATABASE_OPERATION_ERROR"

    def __init__(self, detail: str = "Internal server error",
                 original_error: Optional[Exception] = None):
        super().__init__(detail)
        self.original_error = original_error


class ResourceNotFoundException(DomainException):
    """Store record not found."""

    internal_code = "RESOURCE_NOT_FOUND"

    def __init__(self, detail: str = "Resource not found", resource_id: Any = None):
        resource_info = f" (ID: {resource_id})" if resource_id is not None else ""
        super().__init__(f"{detail}{resource_info}")


class ResourceAlreadyExistsException(DomainException):
    """Store record violates a uniqueness rule."""

    internal_code = "RESOURCE_ALREADY_EXISTS"

    def __init__(self, detail: str = "Resource already exists"):
        super().__init__(detail)
