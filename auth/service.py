"""
Signup, login, refresh and logout.

The service holds no per-session state; session state lives in the
refresh-token rows managed by RefreshTokenManager.
"""
from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from functools import cached_property

from auth.errors import (
    DuplicateEmail,
    InvalidCredentials,
    InvalidToken,
    MalformedToken,
    ValidationFailed,
)
from auth.passwords import CredentialHasher
from auth.refresh_tokens import RefreshTokenManager, split_refresh_token
from auth.settings import AuthSettings
from auth.store import CredentialStore
from auth.tokens import AccessTokenCodec
from models.errors import DuplicateKeyError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    expires_in: str


class AuthService:
    def __init__(
        self,
        store: CredentialStore,
        hasher: CredentialHasher,
        codec: AccessTokenCodec,
        refresh_tokens: RefreshTokenManager,
        settings: AuthSettings,
    ):
        self._store = store
        self._hasher = hasher
        self._codec = codec
        self._refresh_tokens = refresh_tokens
        self._expires_in = settings.access_token_expires_in

    @cached_property
    def _dummy_hash(self) -> str:
        # verified against for unknown emails so both login failures cost the same
        return self._hasher.hash(secrets.token_hex(16))

    def signup(self, email: str | None, password: str | None, name: str | None = None):
        if not email or not password:
            raise ValidationFailed("email and password required")

        # fast path only; the unique constraint is what actually guarantees it
        if self._store.find_user_by_email(email) is not None:
            raise DuplicateEmail()

        password_hash = self._hasher.hash(password)
        try:
            user = self._store.create_user(email=email, password_hash=password_hash, name=name)
        except DuplicateKeyError as exc:
            raise DuplicateEmail() from exc

        logger.info("user %s signed up", user.id)
        return user

    def login(self, email: str | None, password: str | None) -> TokenPair:
        if not email or not password:
            raise ValidationFailed("email and password required")

        user = self._store.find_user_by_email(email)
        if user is None:
            self._hasher.verify(password, self._dummy_hash)
            logger.info("login failed: unknown email")
            raise InvalidCredentials()
        if not self._hasher.verify(password, user.password_hash):
            logger.info("login failed for user %s", user.id)
            raise InvalidCredentials()

        access_token = self._codec.sign(subject=user.id, email=user.email)
        refresh_token = self._refresh_tokens.issue(user.id)
        return TokenPair(access_token, refresh_token, self._expires_in)

    def refresh(self, refresh_token: str | None) -> TokenPair:
        if not refresh_token:
            raise ValidationFailed("refreshToken required")

        rotated = self._refresh_tokens.consume(refresh_token)
        user = self._store.find_user_by_id(rotated.user_id)
        if user is None:
            raise InvalidToken()

        access_token = self._codec.sign(subject=user.id, email=user.email)
        return TokenPair(access_token, rotated.refresh_token, self._expires_in)

    def logout(self, refresh_token: str | None) -> None:
        if not refresh_token:
            raise ValidationFailed("refreshToken required")
        if split_refresh_token(refresh_token) is None:
            raise MalformedToken()
        self._refresh_tokens.revoke(refresh_token)

    def current_user(self, user_id: str):
        return self._store.find_user_by_id(user_id)
