# src/cache/cache_factory.py — v3
"""Factory for result cache instantiation."""

from __future__ import annotations

from datetime import timedelta

from resumeai.cache.base_result_cache import BaseResultCache
from resumeai.config.settings import Settings


def create_result_cache(settings: Settings | None = None) -> BaseResultCache:
    """Instantiate the configured result cache backend.

    Args:
        settings: Application settings. Defaults to the memory backend
            with a 24h TTL.

    Returns:
        Configured BaseResultCache implementation.
    """
    backend = "memory" if settings is None else settings.cache_backend
    ttl = timedelta(seconds=86400 if settings is None else settings.cache_ttl_s)

    if backend == "memory":
        from resumeai.cache.memory_store import MemoryResultCache
        return MemoryResultCache(ttl=ttl)

    if backend == "redis":
        from resumeai.cache.redis_store import RedisResultCache
        if settings is None or not settings.cache_redis_url:
            raise ValueError(
                "CACHE_REDIS_URL must be set when CACHE_BACKEND=redis"
            )
        return RedisResultCache(
            redis_url=settings.cache_redis_url,
            ttl=ttl,
            prefix=settings.cache_redis_prefix,
        )

    raise ValueError(f"Unsupported cache backend: {backend!r}")
