"""
Argon2 hashing for credentials (user passwords and refresh-token secrets)
via argon2-cffi.
"""
from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError

from auth.settings import AuthSettings


class CredentialHasher:
    def __init__(self, settings: AuthSettings):
        self._ph = PasswordHasher(
            time_cost=settings.password_hash_cost,
            memory_cost=settings.password_hash_memory_cost,
        )

    def hash(self, plaintext: str) -> str:
        """Hash a plaintext secret using Argon2 (salted, non-deterministic)."""
        return self._ph.hash(plaintext)

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Verify a plaintext secret against an Argon2 hash.

        A mismatch returns False; a corrupt hash still raises.
        """
        try:
            return self._ph.verify(hashed, plaintext)
        except VerifyMismatchError:
            return False
