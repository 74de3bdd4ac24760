# src/dedup/models.py — v1
"""Persisted analysis records and resolver outcomes."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, Field

RecordKind = Literal["analysis", "reference_match"]


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AnalysisRecord(BaseModel):
    """Stored result for (subject, input hash).

    ``subject_id`` must reference a live subject (an uploaded resume); a
    record whose subject is gone is an orphan.
    """

    id: str = Field(default_factory=_new_id)
    owner_user_id: str
    subject_id: str
    input_hash: str
    result_payload: dict[str, Any]
    kind: RecordKind = "analysis"
    created_at: datetime = Field(default_factory=_utcnow)


class DedupOutcome(BaseModel):
    """What the resolver returned and where it came from."""

    payload: dict[str, Any]
    source: Literal["subject", "reused", "computed"]
    record: AnalysisRecord

    @property
    def from_storage(self) -> bool:
        return self.source != "computed"
