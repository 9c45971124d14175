"""Auth settings: duration parsing and startup validation."""

from __future__ import annotations

from datetime import timedelta

import pytest

from api.config import TestingConfig
from auth.settings import AuthSettings, parse_duration


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("15m", timedelta(minutes=15)),
        ("1h", timedelta(hours=1)),
        ("7d", timedelta(days=7)),
        ("90", timedelta(seconds=90)),
        ("500ms", timedelta(milliseconds=500)),
        (30, timedelta(seconds=30)),
    ],
)
def test_parse_duration_accepts_common_forms(raw, expected) -> None:
    assert parse_duration(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "15 minutes", "-5m", "0s"])
def test_parse_duration_rejects_garbage(raw) -> None:
    with pytest.raises(ValueError):
        parse_duration(raw)


def test_from_config_reads_every_key() -> None:
    settings = AuthSettings.from_config(
        {
            "JWT_SECRET": "s" * 40,
            "JWT_ALGORITHM": "HS512",
            "ACCESS_TOKEN_EXPIRES_IN": "5m",
            "REFRESH_TOKEN_EXPIRES_DAYS": "7",
            "PASSWORD_HASH_COST": "3",
            "PASSWORD_HASH_MEMORY_COST": "1024",
        }
    )
    assert settings.algorithm == "HS512"
    assert settings.access_token_lifetime == timedelta(minutes=5)
    assert settings.refresh_token_lifetime == timedelta(days=7)
    assert settings.password_hash_cost == 3
    assert settings.password_hash_memory_cost == 1024


def test_defaults_match_documented_values() -> None:
    settings = AuthSettings(secret_key="k" * 40)
    assert settings.access_token_expires_in == "15m"
    assert settings.refresh_token_expires_days == 30
    assert settings.password_hash_cost == 10


def test_invalid_values_fail_at_construction() -> None:
    with pytest.raises(ValueError):
        AuthSettings(secret_key="")
    with pytest.raises(ValueError):
        AuthSettings(secret_key="k" * 40, access_token_expires_in="soon")
    with pytest.raises(ValueError):
        AuthSettings(secret_key="k" * 40, refresh_token_expires_days=0)


def test_settings_are_read_only() -> None:
    settings = AuthSettings(secret_key=TestingConfig.JWT_SECRET)
    with pytest.raises(AttributeError):
        settings.secret_key = "other"
