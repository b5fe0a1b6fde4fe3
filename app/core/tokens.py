"""
core/tokens.py

JWT access token helpers:
- issuing tokens with expiration and a unique JTI
- decoding and validating presented tokens
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from app.core.config import settings

logger = logging.getLogger(__name__)


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Create a JWT access token with expiration and unique JTI.

    Args:
        data (dict[str, Any]): Claims to embed; must contain 'sub' and 'role'.
        expires_delta (timedelta | None): Optional custom lifetime. Defaults to settings.

    Returns:
        str: Encoded JWT access token.
    """
    if "sub" not in data or "role" not in data:
        logger.error("Access token creation attempt missing 'sub' or 'role' in data.")
        raise ValueError("Access token payload must include 'sub' and 'role'.")

    expire: datetime = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    jti = str(uuid.uuid4())
    payload: dict[str, Any] = {**data, "exp": expire, "jti": jti}

    logger.info(f"Issuing access token for sub={data.get('sub')} exp={expire} jti={jti}")
    return str(jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM))


def decode_access_token(token: str, verify_exp: bool = True) -> dict[str, Any]:
    """
    Decode an access token.

    Raises:
        JWTError: If the signature is invalid or (when verify_exp) the token expired.
    """
    return jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[settings.ALGORITHM],
        options={"verify_exp": verify_exp},
    )


def seconds_until_expiry(payload: dict[str, Any]) -> int:
    """Remaining lifetime of a decoded token in whole seconds (never negative)."""
    exp = payload.get("exp")
    if exp is None:
        return 0
    remaining = int(exp - datetime.now(timezone.utc).timestamp())
    return max(remaining, 0)


__all__ = ["create_access_token", "decode_access_token", "seconds_until_expiry", "JWTError"]
