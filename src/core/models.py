# src/core/models.py — v2
"""Core domain models shared across packages."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

# Parsed provider output; schema is defined by the prompt, opaque here.
StructuredResult = dict[str, Any]


class ServiceStatus(BaseModel):
    """Monitoring snapshot of the orchestrator's process-wide state."""

    cache_size: int
    pending_requests: int
    active_users: int
    model: str
    provider: str
    cache_ttl_s: int
    user_hourly_limit: int
