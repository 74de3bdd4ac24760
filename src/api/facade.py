# src/api/facade.py — v2
"""Public API facade — the service handle request handlers receive.

Usage:
    from resumeai.api.facade import create_service
    service = create_service(record_store=store)          # once, at startup
    outcome = await service.resolver.resolve_analysis(user_id, resume_id, text)

All process-wide state (result cache, in-flight table, quota table) lives
in the one AnalysisOrchestrator inside the service; tests build fresh
services instead of resetting globals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from resumeai.api.models import ErrorResponse
from resumeai.config.settings import Settings
from resumeai.core.errors import AnalysisError, QuotaExceeded
from resumeai.dedup.resolver import PersistentDedupResolver
from resumeai.pipeline.orchestrator import AnalysisOrchestrator

if TYPE_CHECKING:
    from resumeai.cache.base_result_cache import BaseResultCache
    from resumeai.dedup.base_record_store import BaseRecordStore
    from resumeai.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)


@dataclass
class AnalysisService:
    """Orchestrator plus the dedup resolver bound to a record store."""

    settings: Settings
    orchestrator: AnalysisOrchestrator
    resolver: PersistentDedupResolver


def create_service(
    settings: Settings | None = None,
    record_store: BaseRecordStore | None = None,
    llm_client: BaseLLMClient | None = None,
    cache: BaseResultCache | None = None,
) -> AnalysisService:
    """Build the service from settings.

    Args:
        settings: Global settings. Loaded from .env if None.
        record_store: Durable analysis records. Defaults to the SQLite store
            at RECORD_STORE_PATH.
        llm_client: Provider client. Defaults to the configured adapter.
        cache: Result cache. Defaults to the configured backend.
    """
    settings = settings or Settings()

    if llm_client is None:
        from resumeai.llm.client_factory import create_default_client
        llm_client = create_default_client(settings)

    if record_store is None:
        from resumeai.dedup.sqlite_store import SqliteRecordStore
        record_store = SqliteRecordStore(
            settings.record_store_path, subject_table=settings.record_subject_table
        )

    orchestrator = AnalysisOrchestrator(llm_client, settings=settings, cache=cache)
    resolver = PersistentDedupResolver(record_store, orchestrator)

    logger.info(
        "Analysis service ready: provider=%s, model=%s, cache=%s",
        llm_client.provider_name, llm_client.model, settings.cache_backend,
    )
    return AnalysisService(settings=settings, orchestrator=orchestrator, resolver=resolver)


def describe_error(exc: BaseException) -> ErrorResponse:
    """Map any failure to the status the boundary layer should return.

    Unknown exceptions (storage outages included) become a generic 500 and
    are logged with their traceback.
    """
    if isinstance(exc, AnalysisError):
        return ErrorResponse(
            status_code=exc.status_code,
            error_code=exc.error_code,
            message=exc.message,
            retry_after_minutes=(
                exc.minutes_until_reset if isinstance(exc, QuotaExceeded) else None
            ),
        )

    logger.error("Unhandled error during analysis: %s", exc, exc_info=exc)
    return ErrorResponse(
        status_code=500,
        error_code="INTERNAL_ERROR",
        message="Server error while analyzing resume.",
    )
