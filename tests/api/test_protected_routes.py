"""Auth guard as seen over HTTP."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from models.user import User


def test_me_returns_caller(client, auth_headers) -> None:
    resp = client.get("/api/auth/me", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json()["email"] == "a@x.com"


def test_missing_header(client) -> None:
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Missing Authorization header"


def test_malformed_header(client, tokens) -> None:
    resp = client.get("/api/auth/me", headers={"Authorization": f"Token {tokens['accessToken']}"})
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Invalid Authorization header"


def test_invalid_token(client) -> None:
    resp = client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.jwt"})
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Invalid or expired token"


def test_expired_token(app, client, tokens) -> None:
    codec = app.extensions["access_token_codec"]
    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {tokens['accessToken']}"}).get_json()
    expired = codec.sign(subject=me["id"], email=me["email"], now=datetime.now(timezone.utc) - timedelta(hours=1))

    resp = client.get("/api/auth/me", headers={"Authorization": f"Bearer {expired}"})
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Invalid or expired token"


def test_deleted_user(client, storage, auth_headers) -> None:
    session = storage.get_session()
    session.query(User).delete()
    storage.save()

    resp = client.get("/api/auth/me", headers=auth_headers)
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "User no longer exists"


def test_guard_blocks_the_view(client) -> None:
    resp = client.post("/api/tenants", json={"name": "Acme", "slug": "acme"})
    assert resp.status_code == 401
    assert client.get("/api/tenants").get_json()["meta"]["total"] == 0
