"""AuthService flows against the real store."""

from __future__ import annotations

import pytest

from auth.errors import (
    DuplicateEmail,
    InvalidCredentials,
    InvalidOrExpiredToken,
    InvalidToken,
    MalformedToken,
    ValidationFailed,
)
from auth.service import AuthService
from models.errors import DuplicateKeyError
from models.refresh_token import RefreshToken


@pytest.fixture
def service(storage, hasher, codec, refresh_manager, settings) -> AuthService:
    return AuthService(storage, hasher, codec, refresh_manager, settings)


def test_signup_then_login_yields_usable_access_token(service, codec) -> None:
    user = service.signup("a@x.com", "pw123456", "Ann")

    pair = service.login("a@x.com", "pw123456")

    claims = codec.verify(pair.access_token)
    assert claims.subject == user.id
    assert claims.email == "a@x.com"
    assert pair.expires_in == "15m"
    assert "." in pair.refresh_token


def test_signup_never_stores_plain_password(service) -> None:
    user = service.signup("a@x.com", "pw123456")
    assert user.password_hash != "pw123456"
    assert user.name is None


@pytest.mark.parametrize(("email", "password"), [(None, "pw123456"), ("a@x.com", None), ("", ""), ("a@x.com", "")])
def test_signup_requires_email_and_password(service, email, password) -> None:
    with pytest.raises(ValidationFailed):
        service.signup(email, password)


def test_signup_duplicate_email(service) -> None:
    service.signup("a@x.com", "pw123456")
    with pytest.raises(DuplicateEmail):
        service.signup("a@x.com", "another-password")


def test_email_is_case_sensitive(service) -> None:
    service.signup("a@x.com", "pw123456")
    service.signup("A@x.com", "pw123456")
    with pytest.raises(InvalidCredentials):
        service.login("A@X.COM", "pw123456")


def test_signup_race_maps_store_conflict_to_duplicate_email(service, storage, monkeypatch) -> None:
    # the pre-check misses (another request inserts in between); the store still refuses
    monkeypatch.setattr(storage, "find_user_by_email", lambda email: None)

    def conflict(**kwargs):
        raise DuplicateKeyError("users.email")

    monkeypatch.setattr(storage, "create_user", conflict)
    with pytest.raises(DuplicateEmail):
        service.signup("a@x.com", "pw123456")


def test_store_unique_constraint_is_authoritative(storage, hasher) -> None:
    storage.create_user(email="a@x.com", password_hash=hasher.hash("pw123456"))
    with pytest.raises(DuplicateKeyError):
        storage.create_user(email="a@x.com", password_hash=hasher.hash("pw123456"))


def test_login_failures_are_indistinguishable(service) -> None:
    service.signup("a@x.com", "pw123456")

    with pytest.raises(InvalidCredentials) as wrong_password:
        service.login("a@x.com", "nope-nope")
    with pytest.raises(InvalidCredentials) as unknown_email:
        service.login("ghost@x.com", "pw123456")

    assert str(wrong_password.value) == str(unknown_email.value) == "Invalid credentials"
    assert wrong_password.value.status == unknown_email.value.status == 401


@pytest.mark.parametrize(("email", "password"), [(None, "pw"), ("a@x.com", None)])
def test_login_requires_both_fields(service, email, password) -> None:
    with pytest.raises(ValidationFailed):
        service.login(email, password)


def test_refresh_rotates_and_rejects_replay(service) -> None:
    service.signup("a@x.com", "pw123456")
    pair = service.login("a@x.com", "pw123456")

    rotated = service.refresh(pair.refresh_token)

    assert rotated.refresh_token != pair.refresh_token
    assert rotated.access_token
    with pytest.raises(InvalidOrExpiredToken):
        service.refresh(pair.refresh_token)


def test_refresh_validation(service) -> None:
    with pytest.raises(ValidationFailed):
        service.refresh(None)
    with pytest.raises(MalformedToken):
        service.refresh("nodot")


def test_refresh_for_vanished_user(service, storage, monkeypatch) -> None:
    service.signup("a@x.com", "pw123456")
    pair = service.login("a@x.com", "pw123456")
    real_find = storage.find_user_by_id
    calls = []

    def vanish_after_rotation(user_id):
        calls.append(user_id)
        # present while the token is checked, gone when the service resolves the owner
        return real_find(user_id) if len(calls) == 1 else None

    monkeypatch.setattr(storage, "find_user_by_id", vanish_after_rotation)
    with pytest.raises(InvalidToken):
        service.refresh(pair.refresh_token)


def test_logout_is_idempotent_and_kills_token(service, storage) -> None:
    service.signup("a@x.com", "pw123456")
    pair = service.login("a@x.com", "pw123456")

    assert service.logout(pair.refresh_token) is None
    assert service.logout(pair.refresh_token) is None

    assert storage.get(RefreshToken, pair.refresh_token.split(".", 1)[0]).revoked is True
    with pytest.raises(InvalidOrExpiredToken):
        service.refresh(pair.refresh_token)


def test_logout_unknown_token_succeeds(service) -> None:
    assert service.logout("unknown.secret") is None


@pytest.mark.parametrize("token", [None, ""])
def test_logout_requires_token(service, token) -> None:
    with pytest.raises(ValidationFailed):
        service.logout(token)


def test_logout_rejects_malformed(service) -> None:
    with pytest.raises(MalformedToken):
        service.logout("nodot")
