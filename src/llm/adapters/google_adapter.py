# src/llm/adapters/google_adapter.py — v2
"""Google Gemini adapter implementing BaseLLMClient.

Uses google-generativeai SDK. SDK errors are left untouched: they carry an
HTTP ``code`` the retry layer classifies on.
"""

from __future__ import annotations

import time
from typing import Any

from resumeai.llm.base_client import BaseLLMClient
from resumeai.llm.models import GenerationConfig, LLMResponse


class GoogleAdapter(BaseLLMClient):
    """Google Gemini adapter."""

    def __init__(self, model: str = "gemini-2.0-flash", api_key: str = "", **kwargs: Any):
        self._model = model
        self._api_key = api_key
        self._configured = False

    async def generate(self, prompt: str, config: GenerationConfig) -> LLMResponse:
        import google.generativeai as genai

        if not self._configured:
            genai.configure(api_key=self._api_key)
            self._configured = True

        model = genai.GenerativeModel(
            self._model,
            generation_config={
                "temperature": config.temperature,
                "max_output_tokens": config.max_output_tokens,
                "top_p": config.top_p,
                "top_k": config.top_k,
            },
        )

        t0 = time.monotonic()
        resp = await model.generate_content_async(prompt)
        latency = int((time.monotonic() - t0) * 1000)

        usage = getattr(resp, "usage_metadata", None)
        return LLMResponse(
            content=_response_text(resp),
            input_tokens=getattr(usage, "prompt_token_count", 0) if usage else 0,
            output_tokens=getattr(usage, "candidates_token_count", 0) if usage else 0,
            model=self._model,
            provider="google",
            latency_ms=latency,
            raw_response=resp,
        )

    @property
    def provider_name(self) -> str:
        return "google"

    @property
    def model(self) -> str:
        return self._model


def _response_text(resp: Any) -> str:
    # resp.text raises ValueError when the candidate has no parts (e.g. blocked)
    try:
        return resp.text or ""
    except ValueError:
        return ""
