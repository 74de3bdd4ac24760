# tests/unit/quota/test_unit_rate_limiter.py — v1
"""Tests for quota/rate_limiter.py — fixed hourly window."""

from __future__ import annotations

import pytest

from resumeai.core.errors import QuotaExceeded
from resumeai.quota.rate_limiter import WINDOW, RateLimiter


class TestRateLimiter:
    def test_under_limit_passes(self, clock):
        limiter = RateLimiter(hourly_limit=2, clock=clock)
        limiter.check("u1")
        limiter.increment("u1")
        limiter.check("u1")

    def test_check_does_not_charge(self, clock):
        limiter = RateLimiter(hourly_limit=1, clock=clock)
        for _ in range(5):
            limiter.check("u1")
        assert limiter.get("u1").count == 0

    def test_limit_reached(self, clock):
        limiter = RateLimiter(hourly_limit=2, clock=clock)
        limiter.increment("u1")
        limiter.increment("u1")
        with pytest.raises(QuotaExceeded) as exc_info:
            limiter.check("u1")
        assert exc_info.value.minutes_until_reset == 60
        assert exc_info.value.status_code == 429
        assert "60 minutes" in exc_info.value.message

    def test_minutes_rounded_up(self, clock):
        limiter = RateLimiter(hourly_limit=1, clock=clock)
        limiter.increment("u1")
        clock.advance(minutes=30, seconds=1)
        with pytest.raises(QuotaExceeded) as exc_info:
            limiter.check("u1")
        assert exc_info.value.minutes_until_reset == 30

    def test_minutes_at_least_one(self, clock):
        limiter = RateLimiter(hourly_limit=1, clock=clock)
        limiter.increment("u1")
        clock.advance(hours=1)
        with pytest.raises(QuotaExceeded) as exc_info:
            limiter.check("u1")
        assert exc_info.value.minutes_until_reset == 1

    def test_window_resets_after_expiry(self, clock):
        limiter = RateLimiter(hourly_limit=1, clock=clock)
        limiter.increment("u1")
        clock.advance(hours=1, seconds=1)
        limiter.check("u1")
        assert limiter.get("u1").count == 0
        assert limiter.get("u1").window_reset_at == clock() + WINDOW

    def test_window_is_fixed_not_sliding(self, clock):
        limiter = RateLimiter(hourly_limit=5, clock=clock)
        limiter.increment("u1")
        reset_at = limiter.get("u1").window_reset_at
        clock.advance(minutes=45)
        limiter.increment("u1")
        assert limiter.get("u1").window_reset_at == reset_at

    def test_users_isolated(self, clock):
        limiter = RateLimiter(hourly_limit=1, clock=clock)
        limiter.increment("u1")
        limiter.check("u2")
        assert limiter.active_users == 2
