"""
Opaque, rotating refresh tokens.

Wire format: "<row id>.<hex secret>". The row id is a primary-key lookup;
only an argon2 hash of the secret is stored, so a leaked table does not
yield usable tokens. Every successful consume revokes the presented token
and issues a new one in the same transaction.
"""
from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from auth.errors import InvalidOrExpiredToken, InvalidToken, MalformedToken
from auth.passwords import CredentialHasher
from auth.settings import AuthSettings
from auth.store import CredentialStore
from models.base_model import as_utc, utcnow

logger = logging.getLogger(__name__)

REFRESH_TOKEN_BYTES = 48


def split_refresh_token(token: str | None) -> Optional[Tuple[str, str]]:
    """Split at the first dot; the secret may itself contain dots."""
    if not token or not isinstance(token, str):
        return None
    token_id, sep, secret = token.partition(".")
    if not sep or not token_id or not secret:
        return None
    return token_id, secret


@dataclass(frozen=True)
class RotatedRefreshToken:
    user_id: str
    refresh_token: str


class RefreshTokenManager:
    def __init__(self, store: CredentialStore, hasher: CredentialHasher, settings: AuthSettings):
        self._store = store
        self._hasher = hasher
        self._lifetime = settings.refresh_token_lifetime

    def _stage(self, user_id: str, now: datetime) -> str:
        secret = secrets.token_hex(REFRESH_TOKEN_BYTES)
        row = self._store.create_refresh_token(
            user_id=user_id,
            token_hash=self._hasher.hash(secret),
            expires_at=now + self._lifetime,
        )
        return f"{row.id}.{secret}"

    def issue(self, user_id: str, now: datetime | None = None) -> str:
        """Persist a new token for user_id and return its wire value."""
        try:
            token = self._stage(user_id, now or utcnow())
            self._store.save()
        except Exception:
            self._store.rollback()
            raise
        return token

    def consume(self, token: str, now: datetime | None = None) -> RotatedRefreshToken:
        """
        Verify a wire token, revoke it and issue its successor.

        Raises MalformedToken, InvalidOrExpiredToken (absent, revoked, expired
        or lost a concurrent rotation) or InvalidToken (secret mismatch or
        owner gone). Nothing is written unless rotation fully succeeds.
        """
        parsed = split_refresh_token(token)
        if parsed is None:
            raise MalformedToken()
        token_id, secret = parsed
        now = now or utcnow()

        row = self._store.find_refresh_token_by_id(token_id)
        if row is None or row.revoked or as_utc(row.expires_at) <= now:
            raise InvalidOrExpiredToken()

        if not self._hasher.verify(secret, row.token_hash):
            raise InvalidToken()

        user_id = row.user_id
        if self._store.find_user_by_id(user_id) is None:
            raise InvalidToken()

        try:
            if not self._store.conditional_mark_revoked(token_id):
                logger.warning("refresh token %s was already rotated by a concurrent request", token_id)
                raise InvalidOrExpiredToken()
            new_token = self._stage(user_id, now)
            self._store.save()
        except Exception:
            self._store.rollback()
            raise

        return RotatedRefreshToken(user_id=user_id, refresh_token=new_token)

    def revoke(self, token: str | None) -> None:
        """Revoke a wire token. Malformed or unknown tokens are ignored."""
        parsed = split_refresh_token(token)
        if parsed is None:
            return
        row = self._store.find_refresh_token_by_id(parsed[0])
        if row is None or row.revoked:
            return
        try:
            self._store.mark_refresh_token_revoked(row.id)
            self._store.save()
        except Exception:
            self._store.rollback()
            raise
