# src/llm/base_client.py — v2
"""Abstract LLM client interface and the provider-side failures adapters raise."""

from __future__ import annotations

from abc import ABC, abstractmethod

from resumeai.llm.models import GenerationConfig, LLMResponse


class ProviderHTTPError(Exception):
    """Provider answered with an HTTP error status."""

    def __init__(self, status_code: int, message: str = "") -> None:
        self.status_code = status_code
        super().__init__(f"{status_code} {message}".strip())


class EmptyProviderResponse(Exception):
    """Provider returned no text at all (retryable)."""


class BaseLLMClient(ABC):
    """Unified interface for all LLM providers."""

    @abstractmethod
    async def generate(self, prompt: str, config: GenerationConfig) -> LLMResponse:
        """Single-turn text generation."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (google, openai, anthropic)."""

    @property
    @abstractmethod
    def model(self) -> str:
        """Model identifier requests are sent to."""
