"""
Access tokens: short-lived HS256 JWTs created and verified with PyJWT.

Claims: sub (user id), email (optional), iat, exp. Verification needs no
store lookup; callers re-check that the subject still exists.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import jwt

from auth.settings import AuthSettings


class AccessTokenError(ValueError):
    """Base access token error."""


class InvalidSignature(AccessTokenError):
    """Token cannot be decoded, was not signed with our key, or lacks claims."""


class ExpiredToken(AccessTokenError):
    """Token expiry has passed."""


@dataclass(frozen=True)
class AccessTokenClaims:
    subject: str
    email: Optional[str]
    issued_at: datetime
    expires_at: datetime


def _now() -> datetime:
    return datetime.now(timezone.utc)


class AccessTokenCodec:
    def __init__(self, settings: AuthSettings):
        self._secret = settings.secret_key
        self._algorithm = settings.algorithm
        self._lifetime = settings.access_token_lifetime

    def sign(self, subject: str, email: str | None = None, now: datetime | None = None) -> str:
        now = now or _now()
        payload = {
            "sub": str(subject),
            "iat": int(now.timestamp()),
            "exp": int((now + self._lifetime).timestamp()),
        }
        if email is not None:
            payload["email"] = email
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str, now: datetime | None = None) -> AccessTokenClaims:
        """
        Decode and validate a token. Raises InvalidSignature or ExpiredToken.
        Expiry is checked here against `now` (exp itself counts as expired).
        """
        try:
            decoded = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "require": ["sub", "exp", "iat"]},
            )
        except jwt.InvalidTokenError as exc:
            raise InvalidSignature(f"Invalid token: {exc}") from exc

        exp = decoded.get("exp")
        iat = decoded.get("iat")
        if not isinstance(exp, int) or not isinstance(iat, int):
            raise InvalidSignature("Invalid token: malformed iat/exp")

        now_ts = int((now or _now()).timestamp())
        if now_ts >= exp:
            raise ExpiredToken("Token expired")

        return AccessTokenClaims(
            subject=str(decoded["sub"]),
            email=decoded.get("email"),
            issued_at=datetime.fromtimestamp(iat, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
        )
