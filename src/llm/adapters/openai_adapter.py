# src/llm/adapters/openai_adapter.py — v2
"""OpenAI GPT adapter implementing BaseLLMClient.

Uses the official openai SDK. The chat API has no top_k; it is ignored.
"""

from __future__ import annotations

import time
from typing import Any

from resumeai.llm.base_client import BaseLLMClient
from resumeai.llm.models import GenerationConfig, LLMResponse


class OpenAIAdapter(BaseLLMClient):
    """OpenAI GPT adapter."""

    def __init__(self, model: str = "gpt-4o", api_key: str = "", **kwargs: Any):
        self._model = model
        self._api_key = api_key
        self._client: Any = None

    async def generate(self, prompt: str, config: GenerationConfig) -> LLMResponse:
        if self._client is None:
            import openai

            self._client = openai.AsyncOpenAI(api_key=self._api_key)

        t0 = time.monotonic()
        resp = await self._client.chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=config.max_output_tokens,
            temperature=config.temperature,
            top_p=config.top_p,
        )
        latency = int((time.monotonic() - t0) * 1000)

        choice = resp.choices[0] if resp.choices else None
        usage = resp.usage
        return LLMResponse(
            content=(choice.message.content or "") if choice else "",
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            model=self._model,
            provider="openai",
            latency_ms=latency,
            raw_response=resp,
        )

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def model(self) -> str:
        return self._model
