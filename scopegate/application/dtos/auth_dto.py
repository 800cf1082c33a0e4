# scopegate/application/dtos/auth_dto.py

"""
Schemas for the client-credentials token flow.
"""

from typing import List
from pydantic import BaseModel, ConfigDict, Field


class IssuedToken(BaseModel):
    """
    Result of a token issuance.

    Serialised with the camelCase names clients expect (``expiresIn``).
    """
    model_config = ConfigDict(populate_by_name=True)

    token: str = Field(..., description="Signed JWT access token")
    scopes: List[str] = Field(..., description="Granted scopes")
    expires_in: int = Field(..., alias="expiresIn", description="Token lifetime in seconds")


class PrincipalOutput(BaseModel):
    """Identity carried by the presented token."""
    subject: str = Field(..., description="Public identifier of the client")
    scopes: List[str] = Field(default_factory=list, description="Scopes granted by the token")
