# src/cache/coalescer.py — v1
"""Result cache lookup plus single-flight coalescing of provider calls.

For a given prompt fingerprint at most one compute runs at a time. The
first caller creates the in-flight slot (a shared asyncio task); every
concurrent caller for the same fingerprint awaits that task and receives its
own copy of the result, or the identical exception. Callers await through
``asyncio.shield`` so a caller that goes away never cancels a call others depend on.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable

from resumeai.cache.base_result_cache import BaseResultCache
from resumeai.cache.fingerprint import short
from resumeai.cache.models import CacheEntry

logger = logging.getLogger(__name__)

ComputeFn = Callable[[], Awaitable[dict[str, Any]]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Coalescer:
    """Cache-then-coalesce front for expensive computations."""

    def __init__(
        self,
        cache: BaseResultCache,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._cache = cache
        self._clock = clock
        self._in_flight: dict[str, asyncio.Task[dict[str, Any]]] = {}

    @property
    def pending(self) -> int:
        """Number of in-flight slots."""
        return len(self._in_flight)

    async def get_or_compute(
        self,
        fingerprint: str,
        compute: ComputeFn,
        on_success: Callable[[], None] | None = None,
    ) -> dict[str, Any]:
        """Return a cached, in-flight, or freshly computed result.

        Args:
            fingerprint: Prompt fingerprint keying the cache and the slot.
            compute: Coroutine factory performing the real work.
            on_success: Called once after a fresh compute succeeded and was
                cached. Never called for cache hits or attached callers.

        Raises:
            Whatever ``compute`` raised, identically for every attached caller.
        """
        task = self._in_flight.get(fingerprint)
        if task is None:
            entry = await self._cache.get(fingerprint)
            if entry is not None:
                logger.debug("Cache hit for analysis (hash: %s)", short(fingerprint))
                return entry.payload
            # Re-check: another caller may have opened the slot during the read
            task = self._in_flight.get(fingerprint)

        if task is not None:
            logger.debug("Attaching to in-flight request (hash: %s)", short(fingerprint))
        else:
            task = asyncio.ensure_future(self._run(fingerprint, compute, on_success))
            self._in_flight[fingerprint] = task
            # Registered before any awaiter: the slot is gone before they resume
            task.add_done_callback(
                lambda t, fp=fingerprint: self._release(fp, t)
            )

        payload = await asyncio.shield(task)
        return copy.deepcopy(payload)

    async def invalidate(self, fingerprint: str) -> bool:
        """Drop a cached result. In-flight calls are left alone."""
        removed = await self._cache.delete(fingerprint)
        if removed:
            logger.debug("Cleared cached analysis (hash: %s)", short(fingerprint))
        return removed

    async def cache_size(self) -> int:
        return await self._cache.size()

    async def _run(
        self,
        fingerprint: str,
        compute: ComputeFn,
        on_success: Callable[[], None] | None,
    ) -> dict[str, Any]:
        payload = await compute()
        await self._cache.put(
            CacheEntry(fingerprint=fingerprint, payload=payload, created_at=self._clock())
        )
        if on_success is not None:
            on_success()
        return payload

    def _release(self, fingerprint: str, task: asyncio.Task[dict[str, Any]]) -> None:
        if self._in_flight.get(fingerprint) is task:
            del self._in_flight[fingerprint]
        # Mark the exception retrieved; awaiters get it through the shield
        if not task.cancelled():
            task.exception()
