# src/quota/models.py — v1
"""Per-user quota state, held in memory for the process lifetime."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class UserQuota:
    """Fixed-window counter for one user."""

    user_id: str
    count: int
    window_reset_at: datetime
