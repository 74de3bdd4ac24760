# tests/unit/cache/test_unit_coalescer.py — v1
"""Tests for cache/coalescer.py — single-flight semantics."""

from __future__ import annotations

import asyncio

import pytest

from resumeai.cache.coalescer import Coalescer
from resumeai.cache.memory_store import MemoryResultCache


def _coalescer(clock) -> Coalescer:
    return Coalescer(MemoryResultCache(clock=clock), clock=clock)


class TestCoalescer:
    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_compute(self, clock):
        coalescer = _coalescer(clock)
        calls = 0
        release = asyncio.Event()

        async def compute():
            nonlocal calls
            calls += 1
            await release.wait()
            return {"value": 42}

        waiters = [
            asyncio.ensure_future(coalescer.get_or_compute("fp", compute))
            for _ in range(5)
        ]
        await asyncio.sleep(0)
        assert coalescer.pending == 1
        release.set()
        results = await asyncio.gather(*waiters)

        assert calls == 1
        assert all(r == {"value": 42} for r in results)
        assert coalescer.pending == 0

    @pytest.mark.asyncio
    async def test_failure_shared_and_slot_released(self, clock):
        coalescer = _coalescer(clock)
        calls = 0

        async def compute():
            nonlocal calls
            calls += 1
            await asyncio.sleep(0.01)
            raise RuntimeError("boom")

        results = await asyncio.gather(
            coalescer.get_or_compute("fp", compute),
            coalescer.get_or_compute("fp", compute),
            return_exceptions=True,
        )
        assert calls == 1
        assert all(isinstance(r, RuntimeError) for r in results)
        assert results[0] is results[1]
        assert coalescer.pending == 0
        assert await coalescer.cache_size() == 0

    @pytest.mark.asyncio
    async def test_failure_not_cached_next_call_recomputes(self, clock):
        coalescer = _coalescer(clock)
        outcomes = [RuntimeError("first"), {"ok": True}]

        async def compute():
            outcome = outcomes.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        with pytest.raises(RuntimeError):
            await coalescer.get_or_compute("fp", compute)
        assert await coalescer.get_or_compute("fp", compute) == {"ok": True}

    @pytest.mark.asyncio
    async def test_cache_hit_skips_compute_and_on_success(self, clock):
        coalescer = _coalescer(clock)
        charged = []

        async def compute():
            return {"n": len(charged)}

        await coalescer.get_or_compute("fp", compute, on_success=lambda: charged.append(1))
        await coalescer.get_or_compute("fp", compute, on_success=lambda: charged.append(1))
        assert charged == [1]

    @pytest.mark.asyncio
    async def test_on_success_runs_once_for_coalesced_callers(self, clock):
        coalescer = _coalescer(clock)
        charged = []

        async def compute():
            await asyncio.sleep(0.01)
            return {}

        await asyncio.gather(*[
            coalescer.get_or_compute("fp", compute, on_success=lambda: charged.append(1))
            for _ in range(3)
        ])
        assert charged == [1]

    @pytest.mark.asyncio
    async def test_cancelled_caller_does_not_cancel_compute(self, clock):
        coalescer = _coalescer(clock)
        release = asyncio.Event()

        async def compute():
            await release.wait()
            return {"done": True}

        first = asyncio.ensure_future(coalescer.get_or_compute("fp", compute))
        second = asyncio.ensure_future(coalescer.get_or_compute("fp", compute))
        await asyncio.sleep(0)
        first.cancel()
        release.set()

        assert await second == {"done": True}
        assert first.cancelled()
        assert await coalescer.cache_size() == 1

    @pytest.mark.asyncio
    async def test_distinct_fingerprints_do_not_coalesce(self, clock):
        coalescer = _coalescer(clock)
        calls = []

        def compute_for(key):
            async def compute():
                calls.append(key)
                return {"key": key}
            return compute

        a = await coalescer.get_or_compute("a", compute_for("a"))
        b = await coalescer.get_or_compute("b", compute_for("b"))
        assert (a, b) == ({"key": "a"}, {"key": "b"})
        assert calls == ["a", "b"]

    @pytest.mark.asyncio
    async def test_invalidate(self, clock):
        coalescer = _coalescer(clock)

        async def compute():
            return {}

        await coalescer.get_or_compute("fp", compute)
        assert await coalescer.invalidate("fp") is True
        assert await coalescer.invalidate("fp") is False

    @pytest.mark.asyncio
    async def test_each_caller_gets_own_copy(self, clock):
        coalescer = _coalescer(clock)

        async def compute():
            await asyncio.sleep(0.01)
            return {"scores": {"overall": 80}}

        first, second = await asyncio.gather(
            coalescer.get_or_compute("fp", compute),
            coalescer.get_or_compute("fp", compute),
        )
        first["scores"]["overall"] = 0
        assert second == {"scores": {"overall": 80}}

        hit = await coalescer.get_or_compute("fp", compute)
        hit["extra"] = True
        assert await coalescer.get_or_compute("fp", compute) == {"scores": {"overall": 80}}

    @pytest.mark.asyncio
    async def test_attaches_to_slot_opened_during_slow_cache_read(self, clock):
        class SlowReadCache(MemoryResultCache):
            async def get(self, fingerprint):
                entry = await super().get(fingerprint)
                await asyncio.sleep(0.01)
                return entry

        coalescer = Coalescer(SlowReadCache(clock=clock), clock=clock)
        release = asyncio.Event()
        calls = 0

        async def compute():
            nonlocal calls
            calls += 1
            await release.wait()
            return {"value": 1}

        first = asyncio.ensure_future(coalescer.get_or_compute("fp", compute))
        while coalescer.pending == 0:
            await asyncio.sleep(0.001)
        second = asyncio.ensure_future(coalescer.get_or_compute("fp", compute))
        await asyncio.sleep(0)
        release.set()

        assert await first == await second == {"value": 1}
        assert calls == 1

    @pytest.mark.asyncio
    async def test_concurrent_misses_during_cache_read_share_one_compute(self, clock):
        class SlowReadCache(MemoryResultCache):
            async def get(self, fingerprint):
                entry = await super().get(fingerprint)
                await asyncio.sleep(0.01)
                return entry

        coalescer = Coalescer(SlowReadCache(clock=clock), clock=clock)
        calls = 0

        async def compute():
            nonlocal calls
            calls += 1
            await asyncio.sleep(0.01)
            return {"value": 2}

        results = await asyncio.gather(
            *[coalescer.get_or_compute("fp", compute) for _ in range(3)]
        )
        assert calls == 1
        assert all(r == {"value": 2} for r in results)
