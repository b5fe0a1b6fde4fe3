"""
app/core/blacklist.py

JWT Blacklist

Stores the `jti` of revoked access tokens in Redis until the token would
have expired anyway. Used by logout and checked on every authenticated request.
"""

import logging

import redis.asyncio as redis

from app.core import cache

logger = logging.getLogger(__name__)

BLACKLIST_PREFIX = "jwt_blacklist:"


async def blacklist_token(jti: str, expires_in: int) -> None:
    """
    Revoke a token by its `jti` for `expires_in` seconds.
    """
    if not cache.redis_client:
        logger.warning("[BLACKLIST ASYNC] Redis unavailable: Token not blacklisted.")
        return
    if expires_in <= 0:
        logger.debug(f"[BLACKLIST ASYNC] Token jti={jti} already expired, nothing to store")
        return

    try:
        await cache.redis_client.setex(f"{BLACKLIST_PREFIX}{jti}", expires_in, "true")
        logger.debug(f"[BLACKLIST ASYNC] Token blacklisted: jti={jti} for {expires_in}s")
    except redis.RedisError as e:
        logger.error(f"[BLACKLIST ASYNC] Failed to blacklist token: {e}")


async def is_token_blacklisted(jti: str) -> bool:
    if not cache.redis_client:
        logger.warning("[BLACKLIST ASYNC] Redis unavailable: Assuming token is not blacklisted.")
        return False

    try:
        return await cache.redis_client.exists(f"{BLACKLIST_PREFIX}{jti}") == 1
    except redis.RedisError as e:
        logger.error(f"[BLACKLIST ASYNC] Failed to check token blacklist status: {e}")
        return False
