# src/core/errors.py — v1
"""Typed failures raised by the analysis core.

Every error carries an ``error_code`` and the HTTP ``status_code`` the
boundary layer should answer with. The orchestrator and the dedup resolver
never translate or swallow these; they reach the caller unchanged.
"""

from __future__ import annotations


class AnalysisError(Exception):
    """Base class for all analysis-core failures."""

    error_code = "ANALYSIS_ERROR"
    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInput(AnalysisError):
    """Caller-supplied text failed minimum-length validation."""

    error_code = "INVALID_INPUT"
    status_code = 400


class QuotaExceeded(AnalysisError):
    """User reached the hourly analysis ceiling."""

    error_code = "AI_LIMIT_REACHED"
    status_code = 429

    def __init__(self, minutes_until_reset: int) -> None:
        self.minutes_until_reset = minutes_until_reset
        super().__init__(
            "You have reached your hourly analysis limit. "
            f"Please try again in {minutes_until_reset} minutes."
        )


class ProviderError(AnalysisError):
    """Provider-side failure that survived the retry ceiling."""

    status_code = 503

    def __init__(
        self,
        message: str,
        attempts: int = 0,
        last_error: BaseException | None = None,
    ) -> None:
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(message)


class ProviderRateLimited(ProviderError):
    """Provider kept answering 429 until attempts ran out."""

    error_code = "AI_RATE_LIMITED"

    def __init__(
        self, attempts: int = 0, last_error: BaseException | None = None
    ) -> None:
        super().__init__(
            "AI service is temporarily busy. Please try again in a few moments.",
            attempts=attempts,
            last_error=last_error,
        )


class ProviderUnavailable(ProviderError):
    """Provider unavailable, failing, or returning empty responses."""

    error_code = "AI_SERVICE_ERROR"

    def __init__(
        self, attempts: int = 0, last_error: BaseException | None = None
    ) -> None:
        super().__init__(
            "Failed to get analysis from AI service. Please try again later.",
            attempts=attempts,
            last_error=last_error,
        )


class MalformedProviderOutput(AnalysisError):
    """No JSON object could be recovered from the provider's text."""

    error_code = "AI_MALFORMED_OUTPUT"
    status_code = 500

    def __init__(self, reason: str, snippet: str = "") -> None:
        self.reason = reason
        self.snippet = snippet
        super().__init__(f"Failed to parse AI response as JSON: {reason}")
