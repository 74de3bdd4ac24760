# src/dedup/base_record_store.py — v1
"""Abstract storage interface consumed by the dedup resolver.

The store is owned by the persistence layer; the resolver only reads,
deletes orphans and appends new records through this seam. Storage errors
are not caught anywhere in the core.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from resumeai.dedup.models import AnalysisRecord, RecordKind


class BaseRecordStore(ABC):
    """Unified interface for analysis record backends."""

    @abstractmethod
    async def find_record(
        self, subject_id: str, input_hash: str, kind: RecordKind = "analysis"
    ) -> AnalysisRecord | None:
        """Record of this kind for this exact subject and hash, if any."""

    @abstractmethod
    async def find_records_by_user_and_fingerprint(
        self, user_id: str, input_hash: str, kind: RecordKind = "analysis"
    ) -> list[AnalysisRecord]:
        """A user's records of one kind for a hash, across subjects, newest first."""

    @abstractmethod
    async def subject_exists(self, subject_id: str) -> bool:
        """Whether the referenced subject is still live."""

    @abstractmethod
    async def delete_record(self, record_id: str) -> None:
        """Delete one record by id."""

    @abstractmethod
    async def create_record(
        self,
        owner_user_id: str,
        subject_id: str,
        input_hash: str,
        result_payload: dict[str, Any],
        kind: RecordKind = "analysis",
    ) -> AnalysisRecord:
        """Persist and return a new record."""

    @abstractmethod
    async def delete_records_for_subject(self, subject_id: str) -> int:
        """Delete every record of a subject. Returns the count removed."""
