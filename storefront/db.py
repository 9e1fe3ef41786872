"""
Redis client for durable cart snapshots.

Provides a singleton synchronous Upstash Redis client. The cart store is
synchronous end to end, so only the sync client is exposed here.
"""

from typing import Optional

from upstash_redis import Redis

from storefront import config

_sync_redis_client: Optional[Redis] = None


def get_redis_sync() -> Redis:
    """
    Get sync Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _sync_redis_client

    if _sync_redis_client is None:
        if not config.UPSTASH_REDIS_REST_URL or not config.UPSTASH_REDIS_REST_TOKEN:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _sync_redis_client = Redis(
            url=config.UPSTASH_REDIS_REST_URL,
            token=config.UPSTASH_REDIS_REST_TOKEN,
        )

    return _sync_redis_client


def reset_redis_client() -> None:
    """Drop the cached client (tests, credential rotation)."""
    global _sync_redis_client
    _sync_redis_client = None
