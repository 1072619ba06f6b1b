"""
Storage Module - configuration and clients for durable cart storage.

Provides:
- Storage keys and backend selection read from the environment
- A singleton async Upstash Redis client for the redis backend
"""

import os
from typing import Optional

from upstash_redis.asyncio import Redis as AsyncRedis

# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

# memory | file | redis
CART_STORAGE_BACKEND = os.environ.get("CART_STORAGE_BACKEND", "file")
CART_STORAGE_DIR = os.environ.get("CART_STORAGE_DIR", "data/storage")


_redis_client: Optional[AsyncRedis] = None


def get_redis() -> AsyncRedis:
    """
    Get async Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _redis_client

    if _redis_client is None:
        if not UPSTASH_REDIS_REST_URL or not UPSTASH_REDIS_REST_TOKEN:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _redis_client = AsyncRedis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)

    return _redis_client


class StorageKeys:
    """Keys under which cart state is stored."""

    CART = os.environ.get("CART_STORAGE_KEY", "@RocketShoes:cart")
