"""
app/core/cache.py

Async Redis Client & JSON Cache Helpers

Creates the shared `redis.asyncio` client (also used by the JWT blacklist
and login throttling) and small helpers for caching JSON payloads.
Cache failures are logged and treated as misses.
"""

import json
import logging
from typing import Any

import redis.asyncio as redis

from app.core.config import settings

# ---------------------------------------------------
# Logger Configuration
# ---------------------------------------------------
logger = logging.getLogger(__name__)

# ---------------------------------------------------
# Redis Client Initialization
# ---------------------------------------------------
redis_client: redis.Redis | None = None  # type: ignore[type-arg]

try:
    redis_client = redis.Redis(
        host=settings.REDIS_HOST,
        port=settings.REDIS_PORT,
        db=settings.REDIS_DB,
        decode_responses=True,
    )
    logger.info(f"[REDIS ASYNC] Client configured for {settings.redis_url}")
except redis.RedisError as e:
    logger.error(f"[REDIS ASYNC] Initialization failed: {e}")
    redis_client = None

CACHE_PREFIX = settings.CACHE_PREFIX
DEFAULT_CACHE_TTL = settings.CACHE_TTL_SECONDS


# ---------------------------------------------------
# Key Builders
# ---------------------------------------------------
def cache_key(namespace: str, *parts: object) -> str:
    """Builds `<prefix><namespace>:<part>:<part>`; None parts become `all`."""
    suffix = ":".join("all" if part is None else str(part) for part in parts)
    return f"{CACHE_PREFIX}{namespace}:{suffix}" if suffix else f"{CACHE_PREFIX}{namespace}"


# ---------------------------------------------------
# Read / Write / Invalidate
# ---------------------------------------------------
async def get_cached_json(key: str) -> Any | None:
    if not redis_client:
        return None
    try:
        cached = await redis_client.get(key)
    except redis.RedisError as e:
        logger.error(f"[CACHE ASYNC READ ERROR] {key}: {e}")
        return None
    if cached is None:
        logger.debug(f"[CACHE ASYNC MISS] {key}")
        return None
    logger.debug(f"[CACHE ASYNC HIT] {key}")
    return json.loads(cached)


async def set_cached_json(key: str, value: Any, ttl: int = DEFAULT_CACHE_TTL) -> None:
    if not redis_client:
        return
    try:
        await redis_client.set(key, json.dumps(value, default=str), ex=ttl)
        logger.debug(f"[CACHE ASYNC SET] {key} ttl={ttl}s")
    except redis.RedisError as e:
        logger.error(f"[CACHE ASYNC WRITE ERROR] {key}: {e}")


async def invalidate_pattern(pattern: str) -> int:
    """
    Deletes every key matching `pattern` (SCAN based, safe on large keyspaces).

    Returns:
        int: Number of keys removed.
    """
    if not redis_client:
        return 0
    removed = 0
    try:
        async for key in redis_client.scan_iter(match=pattern):
            await redis_client.delete(key)
            removed += 1
        logger.info(f"[CACHE ASYNC INVALIDATE] {pattern} ({removed} keys)")
    except redis.RedisError as e:
        logger.error(f"[CACHE ASYNC INVALIDATE ERROR] {pattern}: {e}")
    return removed
