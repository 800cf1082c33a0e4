# scopegate/adapters/inbound/api/v1/endpoints/auth_endpoint.py

"""
Endpoints of the client-credentials grant.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Form, Query, status

from scopegate.adapters.inbound.api.deps import access_guard, get_client_auth_service
from scopegate.application.dtos.auth_dto import IssuedToken, PrincipalOutput
from scopegate.application.use_cases.client_auth_use_cases import AsyncClientAuthService
from scopegate.domain.models.access_model import AuthContext

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/token",
    name="issue_token",
    response_model=IssuedToken,
    status_code=status.HTTP_201_CREATED,
    summary="Generate JWT for a client",
    description=(
            "Client-credentials grant. Accepts form-encoded credentials and a "
            "comma-separated list of scopes; every requested scope must be "
            "assigned to the client."
    ),
    responses={
        201: {
            "description": "JWT generated successfully",
            "content": {
                "application/json": {
                    "example": {
                        "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "scopes": ["read", "write"],
                        "expiresIn": 3600
                    }
                }
            }
        },
        400: {
            "description": "Invalid grant type, scopes or expiration",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Some requested scopes are not valid for this client",
                        "code": "INVALID_REQUEST"
                    }
                }
            }
        },
        401: {
            "description": "Invalid client credentials",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Invalid client credentials",
                        "code": "INVALID_CREDENTIALS"
                    }
                }
            }
        }
    }
)
async def issue_token(
        grant_type: Optional[str] = Form(None, description='Must be "client_credentials"'),
        client_id: Optional[str] = Form(None, alias="clientId", description="Client ID"),
        client_secret: Optional[str] = Form(None, alias="clientSecret", description="Client secret"),
        scopes: Optional[str] = Form(None, description="Comma-separated scopes, e.g. read,write"),
        expiration: Optional[str] = Query(
            None, description="Custom expiration time in seconds (e.g., 3600 = 1 hour)"
        ),
        service: AsyncClientAuthService = Depends(get_client_auth_service),
):
    logger.debug(f"Received token request for clientId: {client_id}")
    return await service.client_credentials_grant(
        grant_type=grant_type,
        client_id=client_id,
        client_secret=client_secret,
        scopes=scopes,
        expires_in=expiration,
    )


@router.get(
    "/me",
    name="whoami",
    response_model=PrincipalOutput,
    summary="Current client - identity carried by the token",
    description="Returns the subject and scopes of the presented bearer token.",
)
async def whoami(context: AuthContext = Depends(access_guard)):
    return PrincipalOutput(subject=context.subject, scopes=sorted(context.scopes or ()))
