# src/api/models.py — v2
"""API-level models handed to the HTTP boundary layer."""

from __future__ import annotations

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Boundary-ready description of a failure."""

    status_code: int
    error_code: str
    message: str
    retry_after_minutes: int | None = None
