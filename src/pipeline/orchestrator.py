# src/pipeline/orchestrator.py — v3
"""Analysis orchestrator — the single entry point in front of the provider.

Flow per request:
  rate-limit check → result cache → in-flight coalescer → retrying provider
  call → response parser → cache write → quota increment.

One instance is built at process start and shared by all request handlers;
it owns the cache, the in-flight table and the quota table.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable

from resumeai.cache.base_result_cache import BaseResultCache
from resumeai.cache.coalescer import Coalescer
from resumeai.cache.fingerprint import prompt_fingerprint, short
from resumeai.config.settings import Settings
from resumeai.core.errors import InvalidInput
from resumeai.core.models import ServiceStatus, StructuredResult
from resumeai.llm.base_client import BaseLLMClient
from resumeai.llm.models import GenerationConfig
from resumeai.llm.response_parser import parse_response
from resumeai.llm.retry import RetryConfig, RetryExecutor
from resumeai.logging.context import operation_context
from resumeai.pipeline.prompts import build_analysis_prompt, build_reference_match_prompt
from resumeai.quota.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AnalysisOrchestrator:
    """Cached, coalesced, quota-checked access to the LLM provider."""

    def __init__(
        self,
        client: BaseLLMClient,
        settings: Settings | None = None,
        cache: BaseResultCache | None = None,
        clock: Callable[[], datetime] = _utcnow,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._settings = settings or Settings()
        s = self._settings

        if cache is None:
            if s.cache_backend == "memory":
                from resumeai.cache.memory_store import MemoryResultCache
                cache = MemoryResultCache(ttl=timedelta(seconds=s.cache_ttl_s), clock=clock)
            else:
                from resumeai.cache.cache_factory import create_result_cache
                cache = create_result_cache(s)

        self._client = client
        self._coalescer = Coalescer(cache, clock=clock)
        self._rate_limiter = RateLimiter(hourly_limit=s.user_hourly_limit, clock=clock)
        self._executor = RetryExecutor(
            client,
            RetryConfig(
                max_attempts=s.llm_max_attempts,
                base_delay_s=s.llm_retry_base_delay_s,
            ),
            sleep=sleep,
        )
        self._generation_config = GenerationConfig(
            temperature=s.llm_temperature,
            max_output_tokens=s.llm_max_output_tokens,
            top_p=s.llm_top_p,
            top_k=s.llm_top_k,
        )

    @property
    def rate_limiter(self) -> RateLimiter:
        return self._rate_limiter

    @property
    def generation_config(self) -> GenerationConfig:
        return self._generation_config

    async def analyze_content(self, text: str, user_id: str) -> StructuredResult:
        """Evaluate a single document (resume) on its own.

        Raises:
            InvalidInput: Trimmed text shorter than MIN_CONTENT_CHARS.
            QuotaExceeded, ProviderRateLimited, ProviderUnavailable,
            MalformedProviderOutput: Propagated unchanged.
        """
        if not text or len(text.strip()) < self._settings.min_content_chars:
            raise InvalidInput(
                "Resume text is too short or empty. Please upload a valid resume."
            )
        with operation_context("analyze"):
            return await self.get_analysis(build_analysis_prompt(text), user_id)

    async def analyze_content_against_reference(
        self, text: str, reference_text: str, user_id: str
    ) -> StructuredResult:
        """Compare a document against a reference (job description).

        Raises:
            InvalidInput: Either text below its minimum trimmed length.
        """
        if not text or len(text.strip()) < self._settings.min_content_chars:
            raise InvalidInput("Resume text is too short or empty.")
        if not reference_text or len(reference_text.strip()) < self._settings.min_reference_chars:
            raise InvalidInput(
                "Job description is too short. Please provide a detailed job description."
            )
        with operation_context("reference_match"):
            return await self.get_analysis(
                build_reference_match_prompt(text, reference_text), user_id
            )

    async def get_analysis(
        self,
        prompt: str,
        user_id: str,
        generation_overrides: dict[str, Any] | None = None,
    ) -> StructuredResult:
        """Run a rendered prompt through quota, cache, coalescing and retries.

        Only the caller that actually triggers the provider call is charged,
        and only once that call succeeded and parsed.
        """
        self._rate_limiter.check(user_id)

        fingerprint = prompt_fingerprint(prompt)
        config = self._generation_config
        if generation_overrides:
            config = config.model_copy(update=generation_overrides)

        async def compute() -> StructuredResult:
            raw_text = await self._executor.call(prompt, config)
            return parse_response(raw_text)

        def charge() -> None:
            self._rate_limiter.increment(user_id)
            logger.info(
                "Analysis completed successfully for user %s (hash: %s)",
                user_id, short(fingerprint),
            )

        return await self._coalescer.get_or_compute(fingerprint, compute, on_success=charge)

    async def clear_cached_analysis(self, text: str) -> bool:
        """Forget the cached single-document analysis for ``text``."""
        if not text:
            return False
        return await self._coalescer.invalidate(prompt_fingerprint(build_analysis_prompt(text)))

    async def status(self) -> ServiceStatus:
        """Current cache, in-flight and quota table sizes plus key config."""
        return ServiceStatus(
            cache_size=await self._coalescer.cache_size(),
            pending_requests=self._coalescer.pending,
            active_users=self._rate_limiter.active_users,
            model=self._client.model,
            provider=self._client.provider_name,
            cache_ttl_s=self._settings.cache_ttl_s,
            user_hourly_limit=self._settings.user_hourly_limit,
        )
