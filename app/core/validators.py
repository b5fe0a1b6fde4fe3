"""
core/validators.py

Input Normalizers & Validators

- Password strength (ASCII, 8-128 chars, upper, lower, digit, special)
- Email and phone normalization
- Slug and language-code generation for catalog entries
"""

import re
import string
from typing import Final

# -------------------------------
# Constants
# -------------------------------
MIN_PASSWORD_LENGTH: Final[int] = 8
MAX_PASSWORD_LENGTH: Final[int] = 128
OTP_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\d{6}$")


# -------------------------------
# Passwords
# -------------------------------
def password_validator(password: str) -> str:
    """
    Validates password strength.

    Rules:
    - Must contain only ASCII characters
    - Must include at least one uppercase letter
    - Must include at least one lowercase letter
    - Must include at least one digit
    - Must include at least one special character
    - Length must be between MIN_PASSWORD_LENGTH and MAX_PASSWORD_LENGTH

    Raises:
        ValueError: If any rule is violated
    """
    if not password.isascii():
        raise ValueError("Password must contain only ASCII characters.")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.")
    if len(password) > MAX_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_LENGTH} characters long.")
    if not any(c in string.ascii_uppercase for c in password):
        raise ValueError("Password must contain at least one uppercase letter.")
    if not any(c in string.ascii_lowercase for c in password):
        raise ValueError("Password must contain at least one lowercase letter.")
    if not any(c.isdigit() for c in password):
        raise ValueError("Password must contain at least one digit.")
    if not any(c in string.punctuation for c in password):
        raise ValueError("Password must contain at least one special character.")
    return password


# -------------------------------
# Contact Details
# -------------------------------
def normalize_email(email: str) -> str:
    return email.strip().lower()


def normalize_phone(phone: str | None) -> str | None:
    """Strips spaces and dashes; empty input becomes None."""
    if phone is None:
        return None
    cleaned = re.sub(r"[\s\-()]", "", phone)
    return cleaned or None


def is_valid_otp(code: str) -> bool:
    return bool(OTP_PATTERN.match(code or ""))


# -------------------------------
# Catalog Slugs
# -------------------------------
def normalize_slug(value: str) -> str:
    """'  Other Sunni ' -> 'other_sunni'"""
    return re.sub(r"\s+", "_", value.strip().lower())


def slug_from_label(label: str) -> str:
    """Lowercases and collapses every non-alphanumeric run to '_'."""
    return re.sub(r"[^a-z0-9]+", "_", label.strip().lower()).strip("_")


def language_code_from_label(label: str) -> str:
    """First ten letters of the label, lowercased ('Shina (Gilgiti)' -> 'shinagilgi')."""
    return re.sub(r"[^a-z]", "", label.lower())[:10]
