# src/quota/rate_limiter.py — v1
"""Per-user hourly quota with a fixed (non-sliding) window.

A window opens on the first request after the previous one expired and
lasts exactly one hour. ``check`` only rejects; the counter moves only
through ``increment``, which the orchestrator calls after a provider call
actually succeeded, so failed, cached and coalesced requests cost nothing.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Callable

from resumeai.core.errors import QuotaExceeded
from resumeai.quota.models import UserQuota

logger = logging.getLogger(__name__)

WINDOW = timedelta(hours=1)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RateLimiter:
    """In-memory per-user quota table."""

    def __init__(
        self,
        hourly_limit: int = 50,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._limit = hourly_limit
        self._clock = clock
        self._quotas: dict[str, UserQuota] = {}

    @property
    def hourly_limit(self) -> int:
        return self._limit

    @property
    def active_users(self) -> int:
        return len(self._quotas)

    def get(self, user_id: str) -> UserQuota | None:
        return self._quotas.get(user_id)

    def check(self, user_id: str) -> None:
        """Raise QuotaExceeded if the user's window is full.

        Raises:
            QuotaExceeded: With the whole minutes left until the window resets.
        """
        now = self._clock()
        quota = self._current(user_id, now)
        if quota.count >= self._limit:
            remaining = (quota.window_reset_at - now).total_seconds()
            minutes = max(1, math.ceil(remaining / 60))
            logger.info(
                "User %s hit hourly limit (%d), resets in %d min",
                user_id, self._limit, minutes,
            )
            raise QuotaExceeded(minutes)

    def increment(self, user_id: str) -> None:
        """Charge one provider call to the user's current window."""
        quota = self._current(user_id, self._clock())
        quota.count += 1

    def _current(self, user_id: str, now: datetime) -> UserQuota:
        quota = self._quotas.get(user_id)
        if quota is None:
            quota = UserQuota(user_id=user_id, count=0, window_reset_at=now + WINDOW)
            self._quotas[user_id] = quota
        elif now > quota.window_reset_at:
            quota.count = 0
            quota.window_reset_at = now + WINDOW
        return quota
