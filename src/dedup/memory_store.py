# src/dedup/memory_store.py — v1
"""In-memory record store for tests and single-process local runs.

Subjects are tracked explicitly via ``add_subject`` / ``remove_subject``,
standing in for the resume collection owned by the web layer.
"""

from __future__ import annotations

from typing import Any

from resumeai.dedup.base_record_store import BaseRecordStore
from resumeai.dedup.models import AnalysisRecord, RecordKind


class InMemoryRecordStore(BaseRecordStore):
    """Dict-backed record store."""

    def __init__(self) -> None:
        self._records: dict[str, AnalysisRecord] = {}
        self._subjects: set[str] = set()

    def add_subject(self, subject_id: str) -> None:
        self._subjects.add(subject_id)

    def remove_subject(self, subject_id: str) -> None:
        """Drop a subject but keep its records (they become orphans)."""
        self._subjects.discard(subject_id)

    @property
    def records(self) -> list[AnalysisRecord]:
        return list(self._records.values())

    async def find_record(
        self, subject_id: str, input_hash: str, kind: RecordKind = "analysis"
    ) -> AnalysisRecord | None:
        for record in self._records.values():
            if (
                record.subject_id == subject_id
                and record.input_hash == input_hash
                and record.kind == kind
            ):
                return record
        return None

    async def find_records_by_user_and_fingerprint(
        self, user_id: str, input_hash: str, kind: RecordKind = "analysis"
    ) -> list[AnalysisRecord]:
        # Insertion order breaks created_at ties: later insert is newer
        matches = [
            (i, r) for i, r in enumerate(self._records.values())
            if r.owner_user_id == user_id and r.input_hash == input_hash and r.kind == kind
        ]
        matches.sort(key=lambda pair: (pair[1].created_at, pair[0]), reverse=True)
        return [r for _, r in matches]

    async def subject_exists(self, subject_id: str) -> bool:
        return subject_id in self._subjects

    async def delete_record(self, record_id: str) -> None:
        self._records.pop(record_id, None)

    async def create_record(
        self,
        owner_user_id: str,
        subject_id: str,
        input_hash: str,
        result_payload: dict[str, Any],
        kind: RecordKind = "analysis",
    ) -> AnalysisRecord:
        record = AnalysisRecord(
            owner_user_id=owner_user_id,
            subject_id=subject_id,
            input_hash=input_hash,
            result_payload=result_payload,
            kind=kind,
        )
        self._records[record.id] = record
        return record

    async def delete_records_for_subject(self, subject_id: str) -> int:
        doomed = [rid for rid, r in self._records.items() if r.subject_id == subject_id]
        for rid in doomed:
            del self._records[rid]
        return len(doomed)
