"""
Process-wide auth settings.

Built once by the application factory from the Flask config and handed to
every auth component constructor. Nothing under auth/ reads the environment.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Mapping

_DURATION_RE = re.compile(r"^\s*(\d+)\s*(ms|s|m|h|d|w)?\s*$")

_UNITS = {
    "ms": timedelta(milliseconds=1),
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "d": timedelta(days=1),
    "w": timedelta(weeks=1),
}


def parse_duration(value: str | int) -> timedelta:
    """Parse "15m", "1h", "7d" or a bare number of seconds into a timedelta."""
    if isinstance(value, int):
        if value <= 0:
            raise ValueError("duration must be positive")
        return timedelta(seconds=value)
    match = _DURATION_RE.match(str(value))
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = int(match.group(1)), match.group(2) or "s"
    if amount <= 0:
        raise ValueError("duration must be positive")
    return _UNITS[unit] * amount


@dataclass(frozen=True)
class AuthSettings:
    secret_key: str
    algorithm: str = "HS256"
    access_token_expires_in: str = "15m"
    refresh_token_expires_days: int = 30
    password_hash_cost: int = 10
    password_hash_memory_cost: int = 65536

    def __post_init__(self):
        if not self.secret_key:
            raise ValueError("JWT_SECRET must not be empty")
        if self.refresh_token_expires_days < 1:
            raise ValueError("REFRESH_TOKEN_EXPIRES_DAYS must be >= 1")
        if self.password_hash_cost < 1:
            raise ValueError("PASSWORD_HASH_COST must be >= 1")
        # fail at startup rather than on the first login
        parse_duration(self.access_token_expires_in)

    @property
    def access_token_lifetime(self) -> timedelta:
        return parse_duration(self.access_token_expires_in)

    @property
    def refresh_token_lifetime(self) -> timedelta:
        return timedelta(days=self.refresh_token_expires_days)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "AuthSettings":
        return cls(
            secret_key=config["JWT_SECRET"],
            algorithm=config.get("JWT_ALGORITHM", "HS256"),
            access_token_expires_in=config.get("ACCESS_TOKEN_EXPIRES_IN", "15m"),
            refresh_token_expires_days=int(config.get("REFRESH_TOKEN_EXPIRES_DAYS", 30)),
            password_hash_cost=int(config.get("PASSWORD_HASH_COST", 10)),
            password_hash_memory_cost=int(config.get("PASSWORD_HASH_MEMORY_COST", 65536)),
        )
