"""Redis cache for listing-source search payloads.

Yelp and Google searches are rate limited and billed per call, and ingestion
runs repeat the same queries day to day. Raw payloads are cached per
(prefix, arguments) so a rerun only spends calls on searches it has not made.
"""

import functools
import hashlib
import json
import logging
from typing import Any, Callable

import redis.asyncio as redis

from mylocalguide.config import settings

logger = logging.getLogger(__name__)

KEY_NAMESPACE = "mylocalguide"

_redis_client: redis.Redis | None = None


async def get_redis() -> redis.Redis:
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(settings.redis_url, decode_responses=True)
    return _redis_client


def cache_key(prefix: str, args: tuple, kwargs: dict) -> str:
    payload = json.dumps([[str(a) for a in args], sorted((k, str(v)) for k, v in kwargs.items())])
    digest = hashlib.sha256(payload.encode()).hexdigest()[:16]
    return f"{KEY_NAMESPACE}:{prefix}:{digest}"


async def _read(key: str) -> Any | None:
    try:
        client = await get_redis()
        raw = await client.get(key)
    except Exception as e:
        logger.warning("Redis read failed for %s: %s", key, e)
        return None
    if raw is None:
        return None
    logger.debug("Cache hit: %s", key)
    return json.loads(raw)


async def _write(key: str, value: Any, ttl_seconds: int) -> None:
    try:
        client = await get_redis()
        await client.setex(key, ttl_seconds, json.dumps(value, default=str))
    except Exception as e:
        logger.warning("Redis write failed for %s: %s", key, e)


def cached(prefix: str, ttl_seconds: int = 86400):
    """Cache an async client method's JSON-safe return value in Redis.

    The first positional argument (the client instance) is left out of the
    key. Empty results are returned but never stored: they usually mean an
    error, a missing key or an exhausted rate limit.

    Args:
        prefix: Key prefix, e.g. "yelp:search"
        ttl_seconds: Time-to-live in seconds (default 24 hours)
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(self, *args: Any, **kwargs: Any) -> Any:
            if not settings.cache_enabled:
                return await func(self, *args, **kwargs)

            key = cache_key(prefix, args, kwargs)
            hit = await _read(key)
            if hit is not None:
                return hit

            result = await func(self, *args, **kwargs)
            if result:
                await _write(key, result, ttl_seconds)
            return result
        return wrapper
    return decorator
