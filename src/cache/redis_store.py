# src/cache/redis_store.py — v2
"""Redis-backed result cache (CACHE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Survives restarts and is shared between processes; Redis key expiry
replaces the lazy TTL check of the memory backend.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from resumeai.cache.base_result_cache import BaseResultCache
from resumeai.cache.models import CacheEntry

logger = logging.getLogger(__name__)


class RedisResultCache(BaseResultCache):
    """Result cache stored as JSON strings with a native Redis TTL."""

    def __init__(
        self,
        redis_url: str = "",
        ttl: timedelta = timedelta(hours=24),
        prefix: str = "resumeai:analysis:",
        client: object | None = None,
    ) -> None:
        if client is None:
            try:
                import redis.asyncio as redis
            except ImportError as e:
                raise ImportError(
                    "redis package required: pip install redis"
                ) from e
            client = redis.Redis.from_url(redis_url, decode_responses=True)

        self._client = client
        self._ttl = ttl
        self._prefix = prefix

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    async def get(self, fingerprint: str) -> CacheEntry | None:
        data = await self._client.get(self._key(fingerprint))
        if data is None:
            return None
        try:
            return CacheEntry.model_validate_json(data)
        except ValueError as e:
            logger.warning("Dropping unreadable cache entry %s: %s", fingerprint[:8], e)
            await self._client.delete(self._key(fingerprint))
            return None

    async def put(self, entry: CacheEntry) -> None:
        await self._client.set(
            self._key(entry.fingerprint),
            entry.model_dump_json(),
            ex=int(self._ttl.total_seconds()),
        )

    async def delete(self, fingerprint: str) -> bool:
        removed = await self._client.delete(self._key(fingerprint))
        return bool(removed)

    async def size(self) -> int:
        count = 0
        async for _ in self._client.scan_iter(match=f"{self._prefix}*"):
            count += 1
        return count

    async def close(self) -> None:
        """Close the Redis connection."""
        await self._client.aclose()

    def _key(self, fingerprint: str) -> str:
        return f"{self._prefix}{fingerprint}"
