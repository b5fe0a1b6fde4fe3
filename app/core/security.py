"""
security.py

Password hashing and secret generation:
- bcrypt hashing and verification through passlib
- strong random passwords for admin-created accounts
- numeric one-time codes for email and phone verification
"""

import secrets
import string

from passlib.context import CryptContext

# bcrypt with 12 rounds
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=12)

OTP_LENGTH = 6
PASSWORD_SPECIALS = "!@#$%^&*"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verifies a plain password against a hashed password.
    """
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hashes a plain password using bcrypt.
    """
    return pwd_context.hash(password)


def generate_strong_password(length: int = 16) -> str:
    """
    Returns a random password with at least one upper, lower, digit and special character.
    """
    if length < 4:
        raise ValueError("Password length must be at least 4.")
    alphabet = string.ascii_letters + string.digits + PASSWORD_SPECIALS
    required = [
        secrets.choice(string.ascii_uppercase),
        secrets.choice(string.ascii_lowercase),
        secrets.choice(string.digits),
        secrets.choice(PASSWORD_SPECIALS),
    ]
    rest = [secrets.choice(alphabet) for _ in range(length - len(required))]
    chars = required + rest
    secrets.SystemRandom().shuffle(chars)
    return "".join(chars)


def generate_otp(length: int = OTP_LENGTH) -> str:
    """Returns a zero-padded numeric code, e.g. '042917'."""
    return "".join(secrets.choice(string.digits) for _ in range(length))
