# tests/test_auth_endpoint.py

import asyncio
import logging
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError

from conftest import CLIENT_ID, CLIENT_SECRET
from scopegate.adapters.configuration.config import settings
from scopegate.adapters.inbound.api.deps import access_guard, get_client_auth_service
from scopegate.adapters.inbound.api.route_policies import RoutePolicyTable
from scopegate.adapters.outbound.security.auth_client_manager import ClientAuthManager
from scopegate.application.use_cases.client_auth_use_cases import AsyncClientAuthService
from scopegate.domain.exceptions import DatabaseOperationException
from scopegate.domain.models.access_model import AuthContext, RoutePolicy
from scopegate.main import create_app
from scopegate.shared.middleware import logging_middleware

TOKEN_URL = "/v1/auth/token"


def build_app(client_repository, policies=None):
    app = create_app(policies=policies)
    app.dependency_overrides[get_client_auth_service] = (
        lambda: AsyncClientAuthService(db_session=None, repository=client_repository)
    )
    return app


@pytest.fixture
def http(client_repository):
    return TestClient(build_app(client_repository))


@pytest.fixture
def reports_http(client_repository):
    policies = (
        RoutePolicyTable()
        .declare("issue_token", public=True)
        .declare("health", public=True)
        .declare("list_reports", scopes={"reports:read"})
    )
    app = build_app(client_repository, policies)

    @app.get("/v1/reports", name="list_reports")
    async def list_reports(context: AuthContext = Depends(access_guard)):
        return {"subject": context.subject}

    @app.get("/v1/undeclared", name="undeclared")
    async def undeclared():
        return {"ok": True}

    return TestClient(app)


def token_form(**overrides):
    form = {
        "grant_type": "client_credentials",
        "clientId": CLIENT_ID,
        "clientSecret": CLIENT_SECRET,
        "scopes": "read",
    }
    form.update(overrides)
    return {key: value for key, value in form.items() if value is not None}


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def make_token(scopes, expires_in=600, now=None):
    return asyncio.run(ClientAuthManager.create_client_token(CLIENT_ID, scopes, expires_in, now=now))


def test_token_issued_with_default_lifetime(http):
    response = http.post(TOKEN_URL, data=token_form())

    assert response.status_code == 201
    body = response.json()
    assert body["scopes"] == ["read"]
    assert body["expiresIn"] == 3600
    assert response.headers["Cache-Control"] == "no-store"

    me = http.get("/v1/auth/me", headers=bearer(body["token"]))
    assert me.status_code == 200
    assert me.json() == {"subject": CLIENT_ID, "scopes": ["read"]}


def test_expiration_query_overrides_lifetime(http):
    response = http.post(f"{TOKEN_URL}?expiration=60", data=token_form(scopes="read, write"))

    assert response.status_code == 201
    assert response.json()["expiresIn"] == 60
    assert response.json()["scopes"] == ["read", "write"]


def test_unassigned_scope_is_a_bad_request(http):
    response = http.post(TOKEN_URL, data=token_form(scopes="read,admin"))

    assert response.status_code == 400
    assert response.json() == {
        "detail": "Some requested scopes are not valid for this client",
        "code": "INVALID_REQUEST",
    }


@pytest.mark.parametrize("overrides", [
    {"grant_type": "password"},
    {"grant_type": None},
    {"clientId": None},
    {"clientSecret": None},
    {"scopes": None},
])
def test_malformed_grant_is_a_bad_request(http, overrides):
    response = http.post(TOKEN_URL, data=token_form(**overrides))

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_REQUEST"


def test_unparseable_expiration_is_a_bad_request(http):
    response = http.post(f"{TOKEN_URL}?expiration=soon", data=token_form())

    assert response.status_code == 400


def test_oversized_expiration_is_a_bad_request(http):
    response = http.post(f"{TOKEN_URL}?expiration=99999999999999999999", data=token_form())

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_REQUEST"
    assert "out of range" not in response.text


@pytest.mark.parametrize("client_id, secret", [(CLIENT_ID, "wrong"), ("unknown", CLIENT_SECRET)])
def test_bad_credentials_are_unauthorized(http, client_id, secret):
    response = http.post(TOKEN_URL, data=token_form(clientId=client_id, clientSecret=secret))

    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid client credentials", "code": "INVALID_CREDENTIALS"}
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_health_is_public(http):
    response = http.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.parametrize("headers", [{}, {"Authorization": "Basic abc"}, {"Authorization": "Bearer"}])
def test_me_requires_a_bearer_token(http, headers):
    response = http.get("/v1/auth/me", headers=headers)

    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_CREDENTIALS"


def test_expired_token_is_unauthorized(http):
    token = make_token(["read"], expires_in=60, now=datetime(2020, 1, 1, tzinfo=timezone.utc))

    response = http.get("/v1/auth/me", headers=bearer(token))

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid or expired token"


def test_scoped_route_allows_granted_scope(reports_http):
    response = reports_http.get("/v1/reports", headers=bearer(make_token(["reports:read"])))

    assert response.status_code == 200
    assert response.json() == {"subject": CLIENT_ID}


def test_scoped_route_denies_missing_scope(reports_http):
    response = reports_http.get("/v1/reports", headers=bearer(make_token(["read", "write"])))

    assert response.status_code == 403
    assert response.json() == {"detail": "Access denied", "code": "PERMISSION_DENIED"}


def test_undeclared_route_requires_authentication(reports_http):
    assert reports_http.get("/v1/undeclared").status_code == 401
    assert reports_http.get("/v1/undeclared", headers=bearer(make_token(["read"]))).status_code == 200


def test_openapi_has_no_validation_responses(http):
    schema = http.get("/openapi.json").json()

    for path in schema["paths"].values():
        for operation in path.values():
            assert "422" not in operation["responses"]


def failing_store_app(error):
    repository = MagicMock()
    repository.get_active_by_client_id = AsyncMock(side_effect=error)
    return TestClient(build_app(repository))


def test_store_failure_is_an_opaque_server_error():
    http = failing_store_app(DatabaseOperationException(original_error=SQLAlchemyError("boom")))

    response = http.post(TOKEN_URL, data=token_form())

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error", "code": "DATABASE_OPERATION_ERROR"}
    assert "boom" not in response.text


def test_unexpected_failure_is_an_internal_server_error():
    http = failing_store_app(RuntimeError("unexpected"))

    response = http.post(TOKEN_URL, data=token_form())

    assert response.status_code == 500
    assert response.json()["code"] == "INTERNAL_SERVER_ERROR"


def test_unexpected_failure_detail_is_hidden_in_production(monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")
    http = failing_store_app(RuntimeError("connection string with password"))

    response = http.post(TOKEN_URL, data=token_form())

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error", "code": "INTERNAL_SERVER_ERROR"}


def test_request_log_names_route_and_access_policy(http, caplog):
    caplog.set_level(logging.INFO, logger=logging_middleware.__name__)

    http.get("/health")
    http.post(TOKEN_URL, data=token_form(clientSecret="wrong-secret-value"))

    lines = [r.getMessage() for r in caplog.records if r.name == logging_middleware.__name__]
    assert any("GET /health -> 200 | Route: health (public)" in line for line in lines)
    assert not any("wrong-secret-value" in r.getMessage() for r in caplog.records)


def test_scoped_route_is_logged_with_its_scopes(reports_http, caplog):
    caplog.set_level(logging.INFO, logger=logging_middleware.__name__)

    reports_http.get("/v1/reports", headers=bearer(make_token(["reports:read"])))

    assert any(
        "Route: list_reports (scopes=reports:read)" in r.getMessage()
        for r in caplog.records if r.name == logging_middleware.__name__
    )


@pytest.mark.parametrize("policy, label", [
    (RoutePolicy.build(public=True), "public"),
    (RoutePolicy(), "authenticated"),
    (RoutePolicy.build(scopes={"b", "a"}), "scopes=a,b"),
])
def test_describe_policy(policy, label):
    assert logging_middleware.describe_policy(policy) == label
