# src/dedup/resolver.py — v1
"""Persistent dedup resolver — storage-backed reuse of earlier analyses.

Consulted before the orchestrator so content the system already evaluated
costs no provider quota, including the same resume uploaded again under a
new subject record.

Decision flow per request:
  1. Content fingerprint over the raw input (not the prompt).
  2. Record for (current subject, fingerprint) → return it.
  3. User's records for the fingerprint, newest first:
       - subject still live → reuse its payload
       - subject gone       → orphan, delete it and keep looking
  4. Nothing usable → orchestrator call.
  A result from 3 or 4 is persisted against the current subject, so the
  next lookup for it is a step-2 hit.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Awaitable, Callable

from resumeai.cache.fingerprint import content_fingerprint, short
from resumeai.core.models import StructuredResult
from resumeai.dedup.models import AnalysisRecord, DedupOutcome, RecordKind

if TYPE_CHECKING:
    from resumeai.dedup.base_record_store import BaseRecordStore
    from resumeai.pipeline.orchestrator import AnalysisOrchestrator

logger = logging.getLogger(__name__)


class PersistentDedupResolver:
    """Resolve analyses against durable storage before paying for new ones."""

    def __init__(
        self,
        store: BaseRecordStore,
        orchestrator: AnalysisOrchestrator,
    ) -> None:
        self._store = store
        self._orchestrator = orchestrator

    async def resolve_analysis(
        self, user_id: str, subject_id: str, text: str
    ) -> DedupOutcome:
        """Stored or fresh single-document analysis for a subject."""
        return await self._resolve(
            user_id,
            subject_id,
            content_fingerprint(text),
            "analysis",
            lambda: self._orchestrator.analyze_content(text, user_id),
        )

    async def resolve_reference_match(
        self, user_id: str, subject_id: str, text: str, reference_text: str
    ) -> DedupOutcome:
        """Stored or fresh job-description match for a subject."""
        return await self._resolve(
            user_id,
            subject_id,
            content_fingerprint(text, reference_text),
            "reference_match",
            lambda: self._orchestrator.analyze_content_against_reference(
                text, reference_text, user_id
            ),
        )

    async def purge_subject(self, subject_id: str, text: str | None = None) -> int:
        """Delete a subject's records and its cached prompt result.

        Called by the persistence layer when a subject is deleted.

        Returns:
            Number of records removed.
        """
        removed = await self._store.delete_records_for_subject(subject_id)
        if text:
            await self._orchestrator.clear_cached_analysis(text)
        logger.info("Purged %d analysis record(s) for subject %s", removed, subject_id)
        return removed

    async def _resolve(
        self,
        user_id: str,
        subject_id: str,
        input_hash: str,
        kind: RecordKind,
        compute: Callable[[], Awaitable[StructuredResult]],
    ) -> DedupOutcome:
        existing = await self._store.find_record(subject_id, input_hash, kind)
        if existing is not None:
            logger.debug("Returning existing %s from storage (hash: %s)", kind, short(input_hash))
            return DedupOutcome(
                payload=existing.result_payload, source="subject", record=existing
            )

        candidate = await self._find_live_candidate(user_id, input_hash, kind)
        if candidate is not None:
            logger.debug(
                "Reusing %s from subject %s (hash: %s)",
                kind, candidate.subject_id, short(input_hash),
            )
            payload, source = candidate.result_payload, "reused"
        else:
            payload, source = await compute(), "computed"

        record = await self._store.create_record(
            owner_user_id=user_id,
            subject_id=subject_id,
            input_hash=input_hash,
            result_payload=payload,
            kind=kind,
        )
        return DedupOutcome(payload=payload, source=source, record=record)

    async def _find_live_candidate(
        self, user_id: str, input_hash: str, kind: RecordKind
    ) -> AnalysisRecord | None:
        candidates = await self._store.find_records_by_user_and_fingerprint(
            user_id, input_hash, kind
        )
        for candidate in candidates:
            if await self._store.subject_exists(candidate.subject_id):
                return candidate
            logger.debug("Found orphaned analysis record, deleting: %s", candidate.id)
            await self._store.delete_record(candidate.id)
        return None
