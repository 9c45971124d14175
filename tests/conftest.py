"""Shared fixtures: a fresh in-memory app per test plus auth helpers."""

from __future__ import annotations

from typing import Any

import pytest

from api import create_app
from auth import AuthSettings, CredentialHasher, AccessTokenCodec, RefreshTokenManager
from models import storage as shared_storage


@pytest.fixture
def app():
    app = create_app("testing")
    yield app
    shared_storage.close()
    shared_storage.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def storage(app):
    """The DBStorage bound to the test app's in-memory database."""
    yield shared_storage
    shared_storage.close()


@pytest.fixture
def settings(app) -> AuthSettings:
    return app.extensions["auth_settings"]


@pytest.fixture
def hasher(settings) -> CredentialHasher:
    return CredentialHasher(settings)


@pytest.fixture
def codec(settings) -> AccessTokenCodec:
    return AccessTokenCodec(settings)


@pytest.fixture
def refresh_manager(storage, hasher, settings) -> RefreshTokenManager:
    return RefreshTokenManager(storage, hasher, settings)


@pytest.fixture
def user(storage, hasher):
    return storage.create_user(email="owner@x.com", password_hash=hasher.hash("pw123456"), name="Owner")


@pytest.fixture
def credentials() -> dict[str, Any]:
    """Default signup/login payload used by API tests."""
    return {"email": "a@x.com", "password": "pw123456"}


@pytest.fixture
def tokens(client, credentials) -> dict[str, Any]:
    """Sign up + log in through the API and return the login body."""
    assert client.post("/api/auth/signup", json=credentials).status_code == 201
    resp = client.post("/api/auth/login", json=credentials)
    assert resp.status_code == 200
    return resp.get_json()


@pytest.fixture
def auth_headers(tokens) -> dict[str, str]:
    return {"Authorization": f"Bearer {tokens['accessToken']}"}
