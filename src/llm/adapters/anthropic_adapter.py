# src/llm/adapters/anthropic_adapter.py — v3
"""Anthropic Claude adapter implementing BaseLLMClient.

Uses the official anthropic SDK with a lazily created async client.
top_p is not sent: recent Claude models reject it alongside temperature.
"""

from __future__ import annotations

import time
from typing import Any

from resumeai.llm.base_client import BaseLLMClient
from resumeai.llm.models import GenerationConfig, LLMResponse


class AnthropicAdapter(BaseLLMClient):
    """Adapter for Anthropic Claude models."""

    def __init__(
        self,
        model: str = "claude-sonnet-4-20250514",
        api_key: str | None = None,
        **kwargs: Any,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self.__client = None  # Lazy initialization

    @property
    def _client(self):
        """Lazy-init Anthropic client (only on first API call)."""
        if self.__client is None:
            try:
                import anthropic
            except ImportError as e:
                raise ImportError(
                    "anthropic package required: pip install anthropic"
                ) from e
            self.__client = anthropic.AsyncAnthropic(api_key=self._api_key or "")
        return self.__client

    async def generate(self, prompt: str, config: GenerationConfig) -> LLMResponse:
        t0 = time.monotonic()
        resp = await self._client.messages.create(
            model=self._model,
            max_tokens=config.max_output_tokens,
            temperature=config.temperature,
            top_k=config.top_k,
            messages=[{"role": "user", "content": prompt}],
        )
        latency = int((time.monotonic() - t0) * 1000)

        text = "".join(
            block.text for block in resp.content if getattr(block, "type", "") == "text"
        )
        return LLMResponse(
            content=text,
            input_tokens=resp.usage.input_tokens,
            output_tokens=resp.usage.output_tokens,
            model=self._model,
            provider="anthropic",
            latency_ms=latency,
            raw_response=resp,
        )

    @property
    def provider_name(self) -> str:
        return "anthropic"

    @property
    def model(self) -> str:
        return self._model
