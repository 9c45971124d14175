"""
Authentication core: password hashing, access tokens, rotating refresh
tokens, the auth service and the request guard.
"""
from auth.passwords import CredentialHasher
from auth.refresh_tokens import RefreshTokenManager
from auth.service import AuthService, TokenPair
from auth.settings import AuthSettings
from auth.tokens import AccessTokenCodec


def build_auth_service(store, settings: AuthSettings):
    """Wire the auth components around one store and one settings object."""
    hasher = CredentialHasher(settings)
    codec = AccessTokenCodec(settings)
    refresh_tokens = RefreshTokenManager(store, hasher, settings)
    return AuthService(store, hasher, codec, refresh_tokens, settings), codec


__all__ = [
    "AccessTokenCodec",
    "AuthService",
    "AuthSettings",
    "CredentialHasher",
    "RefreshTokenManager",
    "TokenPair",
    "build_auth_service",
]
