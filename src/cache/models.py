# src/cache/models.py — v2
"""Cache domain models: CacheEntry."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel


class CacheEntry(BaseModel):
    """Parsed provider result keyed by prompt fingerprint."""

    fingerprint: str
    payload: dict[str, Any]
    created_at: datetime

    def is_expired(self, now: datetime, ttl: timedelta) -> bool:
        """True once ``now - created_at`` exceeds the TTL."""
        return now - self.created_at > ttl
