from __future__ import annotations
from dataclasses import dataclass
from functools import wraps
from typing import Optional

from flask import current_app, g, request

from auth.errors import InvalidOrExpiredToken, MalformedHeader, MissingHeader, UserNotFound
from auth.tokens import AccessTokenError


@dataclass(frozen=True)
class AuthContext:
    user_id: str
    email: Optional[str]


def authenticate_request(codec, store, authorization: str | None):
    """
    Resolve an Authorization header value to (AuthContext, user).
    Raises MissingHeader, MalformedHeader, InvalidOrExpiredToken or UserNotFound.
    """
    if not authorization:
        raise MissingHeader()
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise MalformedHeader()

    try:
        claims = codec.verify(parts[1])
    except AccessTokenError as exc:
        raise InvalidOrExpiredToken("Invalid or expired token") from exc

    user = store.find_user_by_id(claims.subject)
    if user is None:
        raise UserNotFound()
    return AuthContext(user_id=claims.subject, email=claims.email), user


def jwt_required():
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            context, user = authenticate_request(
                current_app.extensions["access_token_codec"],
                current_app.extensions["credential_store"],
                request.headers.get("Authorization"),
            )
            g.auth = context
            g.current_user = user
            return fn(*args, **kwargs)

        return wrapper

    return decorator
