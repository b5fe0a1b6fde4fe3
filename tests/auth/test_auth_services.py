"""
tests/auth/test_auth_services.py

Unit tests for the pure helpers behind the auth service:
- phone change cooldown
- account response assembly
- password, contact and OTP validators
- JWT issue and decode
"""

from datetime import datetime, timedelta, timezone

import pytest
from jose import JWTError

from app.auth.services import build_account_response, phone_cooldown
from app.core.config import settings
from app.core.tokens import create_access_token, decode_access_token, seconds_until_expiry
from app.core.validators import (
    is_valid_otp,
    normalize_email,
    normalize_phone,
    password_validator,
)
from app.database.models import User

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


# ---------------------------------------------------
# Phone Cooldown
# ---------------------------------------------------
def test_phone_cooldown_never_changed() -> None:
    assert phone_cooldown(None, NOW) == (0, None)


def test_phone_cooldown_active_window() -> None:
    changed_at = NOW - timedelta(days=10)
    days, ends_at = phone_cooldown(changed_at, NOW)
    assert days == settings.PHONE_CHANGE_COOLDOWN_DAYS - 10
    assert ends_at == changed_at + timedelta(days=settings.PHONE_CHANGE_COOLDOWN_DAYS)


def test_phone_cooldown_partial_day_rounds_up() -> None:
    changed_at = NOW - timedelta(days=settings.PHONE_CHANGE_COOLDOWN_DAYS - 1, hours=1)
    days, _ = phone_cooldown(changed_at, NOW)
    assert days == 1


def test_phone_cooldown_expired() -> None:
    changed_at = NOW - timedelta(days=settings.PHONE_CHANGE_COOLDOWN_DAYS + 1)
    assert phone_cooldown(changed_at, NOW) == (0, None)


def test_build_account_response_includes_cooldown(fake_member_user: User) -> None:
    fake_member_user.phone = "+923001234567"
    fake_member_user.phone_changed_at = datetime.now(timezone.utc) - timedelta(days=5)
    account = build_account_response(fake_member_user)
    assert account.email == fake_member_user.email
    assert account.phone_cooldown_days > 0
    assert account.phone_cooldown_ends_at is not None


# ---------------------------------------------------
# Validators
# ---------------------------------------------------
def test_password_validator_accepts_strong_password() -> None:
    assert password_validator("StrongPass@123") == "StrongPass@123"


@pytest.mark.parametrize(
    "password, message",
    [
        ("Sh@1a", "at least 8"),
        ("lowercase@123", "uppercase"),
        ("UPPERCASE@123", "lowercase"),
        ("NoDigits@here", "digit"),
        ("NoSpecial123", "special"),
        ("Pässword@123", "ASCII"),
    ],
)
def test_password_validator_rejects_weak_passwords(password: str, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        password_validator(password)


def test_normalize_email() -> None:
    assert normalize_email("  Member.Test@Example.COM ") == "member.test@example.com"


def test_normalize_phone() -> None:
    assert normalize_phone("+92 (300) 123-4567") == "+923001234567"
    assert normalize_phone("   ") is None
    assert normalize_phone(None) is None


@pytest.mark.parametrize("code, valid", [("123456", True), ("12345", False), ("12a456", False), ("", False)])
def test_is_valid_otp(code: str, valid: bool) -> None:
    assert is_valid_otp(code) is valid


# ---------------------------------------------------
# Tokens
# ---------------------------------------------------
def test_access_token_roundtrip_claims() -> None:
    token = create_access_token({"sub": "user-1", "role": "USER"})
    payload = decode_access_token(token)
    assert payload["sub"] == "user-1"
    assert payload["role"] == "USER"
    assert payload["jti"]
    assert 0 < seconds_until_expiry(payload) <= settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60


def test_access_token_requires_sub_and_role() -> None:
    with pytest.raises(ValueError):
        create_access_token({"sub": "user-1"})


def test_expired_token_decodes_only_without_exp_check() -> None:
    token = create_access_token({"sub": "user-1", "role": "USER"}, timedelta(seconds=-5))
    with pytest.raises(JWTError):
        decode_access_token(token)
    payload = decode_access_token(token, verify_exp=False)
    assert seconds_until_expiry(payload) == 0
