"""The narrow persistence surface the auth package needs.

models.DBStorage satisfies it; any other engine can as long as writes made
between save() calls commit or roll back together.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol


class CredentialStore(Protocol):
    def find_user_by_email(self, email: str) -> Optional[Any]: ...

    def find_user_by_id(self, user_id: str) -> Optional[Any]: ...

    def create_user(self, email: str, password_hash: str, name: str | None = None) -> Any:
        """Persist a user. Raises models.errors.DuplicateKeyError on a taken email."""
        ...

    def find_refresh_token_by_id(self, token_id: str) -> Optional[Any]: ...

    def create_refresh_token(self, user_id: str, token_hash: str, expires_at: datetime) -> Any: ...

    def mark_refresh_token_revoked(self, token_id: str) -> None: ...

    def conditional_mark_revoked(self, token_id: str) -> bool:
        """Revoke only if currently unrevoked; False means someone else did."""
        ...

    def save(self) -> None: ...

    def rollback(self) -> None: ...
