# src/cache/memory_store.py — v1
"""Process-local result cache (default CACHE_BACKEND=memory).

Entries are evicted lazily when read past their TTL; there is no sweeper.
State resets on restart. Entries are copied on the way in and out so
callers never share a payload object with the cache.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from resumeai.cache.base_result_cache import BaseResultCache
from resumeai.cache.fingerprint import short
from resumeai.cache.models import CacheEntry

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemoryResultCache(BaseResultCache):
    """Dict-backed TTL cache."""

    def __init__(
        self,
        ttl: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    async def get(self, fingerprint: str) -> CacheEntry | None:
        entry = self._entries.get(fingerprint)
        if entry is None:
            return None
        if entry.is_expired(self._clock(), self._ttl):
            logger.debug("Cache entry expired (hash: %s)", short(fingerprint))
            del self._entries[fingerprint]
            return None
        return entry.model_copy(deep=True)

    async def put(self, entry: CacheEntry) -> None:
        self._entries[entry.fingerprint] = entry.model_copy(deep=True)

    async def delete(self, fingerprint: str) -> bool:
        return self._entries.pop(fingerprint, None) is not None

    async def size(self) -> int:
        return len(self._entries)
