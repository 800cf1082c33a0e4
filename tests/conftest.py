# tests/conftest.py

import os

# Settings are read at import time, so the environment must be ready first
os.environ["SECRET_KEY"] = "test-secret-key-for-scopegate"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "testing"
os.environ["ACCESS_TOKEN_EXPIRE_SECONDS"] = "3600"

import uuid
from typing import Dict, Iterable, Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker

from scopegate.adapters.outbound.persistence.database import create_engine_for, create_tables
from scopegate.adapters.outbound.security.secret_hasher import ClientSecretHasher
from scopegate.application.ports.outbound import IClientRepository
from scopegate.domain.models.client_domain_model import Client, Scope

CLIENT_ID = "billing-service"
CLIENT_SECRET = "s3cret-value"


class InMemoryClientRepository(IClientRepository):
    """Credential store double keyed by client_id."""

    def __init__(self, clients: Iterable[Client] = ()):
        self.clients: Dict[str, Client] = {client.client_id: client for client in clients}
        self.lookups = []

    async def get_active_by_client_id(self, db, client_id: str) -> Optional[Client]:
        self.lookups.append(client_id)
        client = self.clients.get(client_id)
        if client is None or not client.is_active:
            return None
        return client


@pytest.fixture(scope="session")
def hashed_secret() -> str:
    return ClientSecretHasher.crypt_context.hash(CLIENT_SECRET)


@pytest.fixture
def make_client(hashed_secret):
    def _make(client_id: str = CLIENT_ID, scopes: Iterable[str] = ("read", "write"), **kwargs) -> Client:
        return Client(
            id=uuid.uuid4(),
            client_id=client_id,
            client_secret=kwargs.pop("client_secret", hashed_secret),
            scopes=tuple(Scope(id=uuid.uuid4(), name=name) for name in scopes),
            **kwargs,
        )

    return _make


@pytest.fixture
def client_repository(make_client) -> InMemoryClientRepository:
    return InMemoryClientRepository([make_client()])


@pytest_asyncio.fixture
async def db_engine():
    engine = create_engine_for("sqlite+aiosqlite:///:memory:")
    await create_tables(bind=engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(bind=db_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session
