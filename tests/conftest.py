from types import SimpleNamespace

import pytest
from httpx import ASGITransport, AsyncClient

from backend.app.db import init_models
from backend.app.db.base import get_db
from backend.app.db.session import create_engine, create_session_factory
from backend.app.main import app
from backend.app.models import Organization, User
from backend.app.security.jwt import create_session_token
from client.cipher import encrypt_fields, hash_private_key

PRIVATE_KEY = "alice-private-key-material"


@pytest.fixture
async def engine(tmp_path):
    """A fresh SQLite database file per test."""
    test_engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    await init_models(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def owners(session_factory):
    """
    Two organizations and two users:
    alice belongs to acme and globex, bob to acme.
    """
    async with session_factory() as session:
        acme = Organization(name="Acme")
        globex = Organization(name="Globex")
        alice = User(username="alice")
        bob = User(username="bob")
        session.add_all([acme, globex, alice, bob])
        await session.commit()
        return SimpleNamespace(
            acme=acme.id, globex=globex.id, alice=alice.id, bob=bob.id,
        )


@pytest.fixture
def auth_headers():
    def _headers(user_id: str, organization_id: str) -> dict:
        return {"Authorization": f"Bearer {create_session_token(user_id, organization_id)}"}
    return _headers


@pytest.fixture
async def api_client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def cipher_payload():
    """A valid create/update body, encrypted for real with PRIVATE_KEY."""
    def _payload(secret_type: str = "WEB_LOGIN", name: str = "Work email",
                 value: str = '{"username": "alice", "password": "correct-horse-battery"}') -> dict:
        fields = encrypt_fields(name, value, hash_private_key(PRIVATE_KEY))
        body = fields.model_dump(by_alias=True, exclude={"algorithm"})
        body["secretType"] = secret_type
        return body
    return _payload
