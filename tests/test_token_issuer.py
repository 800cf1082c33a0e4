# tests/test_token_issuer.py

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from conftest import CLIENT_ID, CLIENT_SECRET
from scopegate.adapters.configuration.config import settings
from scopegate.adapters.outbound.security.auth_client_manager import ClientAuthManager
from scopegate.application.use_cases.client_auth_use_cases import AsyncClientAuthService
from scopegate.domain.exceptions import InvalidCredentialsException, InvalidRequestException
from scopegate.domain.services.auth_service import AuthService

ISSUED_AT = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def service(client_repository):
    return AsyncClientAuthService(db_session=None, repository=client_repository)


@pytest.mark.asyncio
async def test_issued_token_verifies_to_its_subject_and_scopes(service, make_client):
    issued = await service.issue_token(make_client(), ["read"], expires_in=600, now=ISSUED_AT)

    payload = await ClientAuthManager.verify_client_token(issued.token, now=ISSUED_AT)

    assert issued.scopes == ["read"]
    assert issued.expires_in == 600
    assert payload["sub"] == CLIENT_ID
    assert payload["scopes"] == ["read"]
    assert payload["type"] == "client"
    assert payload["exp"] - payload["iat"] == 600


@pytest.mark.asyncio
async def test_token_is_valid_strictly_before_exp(service, make_client):
    issued = await service.issue_token(make_client(), ["read"], expires_in=600, now=ISSUED_AT)

    await ClientAuthManager.verify_client_token(issued.token, now=ISSUED_AT + timedelta(seconds=599))

    with pytest.raises(InvalidCredentialsException):
        await ClientAuthManager.verify_client_token(issued.token, now=ISSUED_AT + timedelta(seconds=600))
    with pytest.raises(InvalidCredentialsException):
        await ClientAuthManager.verify_client_token(issued.token, now=ISSUED_AT + timedelta(days=1))


@pytest.mark.asyncio
async def test_zero_lifetime_token_is_already_expired(service, make_client):
    issued = await service.issue_token(make_client(), ["read"], expires_in=0, now=ISSUED_AT)

    assert issued.expires_in == 0
    with pytest.raises(InvalidCredentialsException):
        await ClientAuthManager.verify_client_token(issued.token, now=ISSUED_AT)


@pytest.mark.asyncio
async def test_verification_is_repeatable(service, make_client):
    issued = await service.issue_token(make_client(), ["read", "write"], now=ISSUED_AT)

    first = await ClientAuthManager.verify_client_token(issued.token, now=ISSUED_AT)
    second = await ClientAuthManager.verify_client_token(issued.token, now=ISSUED_AT)

    assert first == second


@pytest.mark.asyncio
async def test_default_lifetime_comes_from_settings(service):
    issued = await service.client_credentials_grant(
        grant_type="client_credentials",
        client_id=CLIENT_ID,
        client_secret=CLIENT_SECRET,
        scopes="read",
    )

    assert issued.expires_in == settings.ACCESS_TOKEN_EXPIRE_SECONDS == 3600
    assert issued.scopes == ["read"]


@pytest.mark.asyncio
async def test_tampered_token_is_rejected(service, make_client):
    issued = await service.issue_token(make_client(), ["read"], now=ISSUED_AT)
    header, payload, signature = issued.token.split(".")
    flipped = "B" if signature[0] == "A" else "A"
    tampered = ".".join([header, payload, flipped + signature[1:]])

    with pytest.raises(InvalidCredentialsException):
        await ClientAuthManager.verify_client_token(tampered, now=ISSUED_AT)


@pytest.mark.asyncio
async def test_token_signed_with_another_key_is_rejected():
    payload = AuthService.create_token_payload(CLIENT_ID, ["read"], ISSUED_AT, timedelta(hours=1))
    forged = jwt.encode(payload, "another-key", algorithm="HS256")

    with pytest.raises(InvalidCredentialsException):
        await ClientAuthManager.verify_client_token(forged, now=ISSUED_AT)


@pytest.mark.asyncio
async def test_token_of_another_type_is_rejected():
    payload = AuthService.create_token_payload(
        CLIENT_ID, ["read"], ISSUED_AT, timedelta(hours=1), token_type="user"
    )
    token = jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    with pytest.raises(InvalidCredentialsException):
        await ClientAuthManager.verify_client_token(token, now=ISSUED_AT)


@pytest.mark.parametrize("raw, expected", [(None, 3600), ("", 3600), ("120", 120), (45, 45), (0, 0), ("0", 0)])
def test_expiration_override(raw, expected):
    assert AuthService.resolve_expires_in(raw, 3600) == expected


@pytest.mark.parametrize("raw", ["-5", "abc", "1.5", -1, True])
def test_invalid_expiration_override(raw):
    with pytest.raises(InvalidRequestException):
        AuthService.resolve_expires_in(raw, 3600)


@pytest.mark.parametrize("raw", ["300000000000", "99999999999999999999", 10 ** 12, "9" * 5000])
def test_expiration_above_the_cap_is_rejected(raw):
    with pytest.raises(InvalidRequestException):
        AuthService.resolve_expires_in(raw, 3600, max_seconds=settings.MAX_ACCESS_TOKEN_EXPIRE_SECONDS)


def test_expiration_at_the_cap_is_accepted():
    assert AuthService.resolve_expires_in("86400", 3600, max_seconds=86400) == 86400


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", ["300000000000", "99999999999999999999"])
async def test_grant_rejects_an_oversized_expiration(service, raw):
    with pytest.raises(InvalidRequestException):
        await service.client_credentials_grant(
            grant_type="client_credentials",
            client_id=CLIENT_ID,
            client_secret=CLIENT_SECRET,
            scopes="read",
            expires_in=raw,
        )


@pytest.mark.asyncio
async def test_explicit_zero_default_lifetime_is_kept(client_repository, make_client):
    service = AsyncClientAuthService(db_session=None, repository=client_repository, default_expires_in=0)

    issued = await service.issue_token(make_client(), ["read"], now=ISSUED_AT)

    assert service.default_expires_in == 0
    assert issued.expires_in == 0
