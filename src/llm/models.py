# src/llm/models.py — v2
"""LLM-specific types: GenerationConfig, LLMResponse."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class GenerationConfig(BaseModel):
    """Sampling parameters sent with every prompt.

    Defaults are the most deterministic settings: greedy decoding, so the
    same prompt keeps producing the same analysis.
    """

    temperature: float = 0.0
    max_output_tokens: int = 8192
    top_p: float = 1.0
    top_k: int = 1


class LLMResponse(BaseModel):
    """Normalized response from any LLM provider."""

    content: str
    model: str
    provider: str
    latency_ms: int
    input_tokens: int = 0
    output_tokens: int = 0
    raw_response: Any = None
