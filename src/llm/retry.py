# src/llm/retry.py — v2
"""Bounded retries with exponential backoff around the provider call.

Retryable: provider rate limiting (429), provider unavailability (5xx),
structurally empty responses. Anything else stops at the first failure.
Parsing happens after this layer, so malformed output is never retried.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from resumeai.core.errors import ProviderRateLimited, ProviderUnavailable
from resumeai.llm.base_client import BaseLLMClient, EmptyProviderResponse
from resumeai.llm.models import GenerationConfig

logger = logging.getLogger(__name__)

RETRYABLE_ERROR_TYPES = frozenset({"rate_limit", "server_error", "empty_response"})


@dataclass(frozen=True)
class RetryConfig:
    """Attempt ceiling and backoff schedule."""

    max_attempts: int = 3
    base_delay_s: float = 1.0
    backoff_factor: float = 2.0


def status_of(error: BaseException) -> int | None:
    """HTTP status carried by an SDK exception, if any."""
    for attr in ("status_code", "code", "status"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and not isinstance(value, bool) and 100 <= value < 600:
            return int(value)
    return None


def classify_error(error: BaseException) -> str:
    """Classify a provider failure into a retry error type."""
    if isinstance(error, EmptyProviderResponse):
        return "empty_response"

    status = status_of(error)
    if status is not None:
        if status == 429:
            return "rate_limit"
        if status >= 500:
            return "server_error"
        return "client_error"

    msg = str(error).lower()
    if "429" in msg or "rate limit" in msg or "resource exhausted" in msg:
        return "rate_limit"
    if any(c in msg for c in ("500", "502", "503", "504", "unavailable", "server error")):
        return "server_error"
    return "unknown"


def compute_delay(config: RetryConfig, attempt: int) -> float:
    """Delay after a failed attempt (1-based): ``base * factor^(attempt-1)``."""
    return config.base_delay_s * (config.backoff_factor ** (attempt - 1))


class RetryExecutor:
    """Invokes the provider with bounded retries.

    The wait between attempts is an awaited sleep, so other requests keep
    running on the event loop meanwhile.
    """

    def __init__(
        self,
        client: BaseLLMClient,
        config: RetryConfig | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._client = client
        self._config = config or RetryConfig()
        self._sleep = sleep

    @property
    def config(self) -> RetryConfig:
        return self._config

    async def call(self, prompt: str, generation_config: GenerationConfig) -> str:
        """Return the provider's raw text.

        Raises:
            ProviderRateLimited: Last failure was a 429.
            ProviderUnavailable: Any other provider failure, or a
                non-retryable one on the first attempt.
        """
        max_attempts = self._config.max_attempts
        last_error: Exception | None = None
        error_type = "unknown"
        attempts = 0

        while attempts < max_attempts:
            attempts += 1
            try:
                response = await self._client.generate(prompt, generation_config)
                if not response.content or not response.content.strip():
                    raise EmptyProviderResponse("Empty response from AI service.")
                return response.content
            except Exception as e:
                last_error = e
                error_type = classify_error(e)

                if error_type not in RETRYABLE_ERROR_TYPES:
                    break
                if attempts < max_attempts:
                    delay = compute_delay(self._config, attempts)
                    logger.warning(
                        "AI API error (attempt %d/%d, %s): %s. Retrying in %.1fs",
                        attempts, max_attempts, error_type, e, delay,
                    )
                    await self._sleep(delay)

        logger.error(
            "AI API call failed after %d attempt(s) (%s): %s",
            attempts, error_type, last_error,
        )
        if error_type == "rate_limit":
            raise ProviderRateLimited(attempts, last_error) from last_error
        raise ProviderUnavailable(attempts, last_error) from last_error
