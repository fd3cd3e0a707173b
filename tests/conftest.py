"""Pytest configuration and fixtures for Hero Roster API tests."""
from datetime import datetime, timedelta, timezone

import pytest

from api import create_app
from models import storage
from models.account_store import AccountStore
from utils.security import register_account
from utils.tokens import TokenSigner, RefreshTokenManager


class FrozenClock:
    """Callable clock for the token components; advance() moves it forward."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def app():
    """App bound to a fresh in-memory SQLite database."""
    app = create_app("test")
    yield app
    storage.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return AccountStore(storage)


@pytest.fixture
def token_config(app):
    return app.extensions["token_config"]


@pytest.fixture
def clock():
    return FrozenClock(datetime.now(timezone.utc))


@pytest.fixture
def signer(token_config, clock):
    return TokenSigner(token_config, clock=clock)


@pytest.fixture
def manager(store, signer, token_config, clock):
    return RefreshTokenManager(store, signer, token_config, clock=clock)


@pytest.fixture
def alice(store):
    return register_account(store, "alice", "pw1")


def register(client, username="alice", password="pw1"):
    return client.post("/auth/register", json={"username": username, "password": password})


def login(client, username="alice", password="pw1"):
    return client.post("/auth/login", json={"username": username, "password": password})


@pytest.fixture
def auth_headers(client):
    """Bearer headers for a freshly registered and logged-in account."""
    assert register(client).status_code == 201
    response = login(client)
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.get_json()['accessToken']}"}
