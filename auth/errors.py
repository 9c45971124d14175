"""
Auth error taxonomy. Each error carries the HTTP status, the error code used
in the response envelope, and a client-safe message.
"""
from __future__ import annotations


class AuthError(Exception):
    status = 500
    error = "INTERNAL_ERROR"
    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(AuthError):
    status = 400
    error = "VALIDATION_ERROR"
    default_message = "Invalid input"


class MalformedToken(ValidationFailed):
    default_message = "Invalid refresh token format"


class DuplicateResource(AuthError):
    status = 409
    error = "CONFLICT"
    default_message = "Resource already exists"


class DuplicateEmail(DuplicateResource):
    default_message = "Email already registered"


class AuthenticationFailure(AuthError):
    status = 401
    error = "UNAUTHORIZED"
    default_message = "Unauthorized"


class InvalidCredentials(AuthenticationFailure):
    default_message = "Invalid credentials"


class InvalidOrExpiredToken(AuthenticationFailure):
    default_message = "Invalid or expired refresh token"


class InvalidToken(AuthenticationFailure):
    default_message = "Invalid refresh token"


class MissingHeader(AuthenticationFailure):
    default_message = "Missing Authorization header"


class MalformedHeader(AuthenticationFailure):
    default_message = "Invalid Authorization header"


class UserNotFound(AuthenticationFailure):
    default_message = "User no longer exists"
