# src/llm/response_parser.py — v1
"""Recover a JSON object from free-form model output.

The provider has no hard output-schema guarantee, so this module is
permissive about formatting noise (code fences, prose around the object,
trailing commas, bare keys, stray line breaks) and strict about the end
result: it must be valid JSON and a top-level object.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from resumeai.core.errors import MalformedProviderOutput

logger = logging.getLogger(__name__)

SNIPPET_LENGTH = 500

_JSON_FENCE = re.compile(r"```json\s*([\s\S]*?)\s*```", re.IGNORECASE)
_ANY_FENCE = re.compile(r"```[\w-]*\s*([\s\S]*?)\s*```")
_LINE_BREAKS = re.compile(r"[\r\n]+")
_TRAILING_COMMA = re.compile(r",\s*([}\]])")
_BARE_KEY = re.compile(r"([{,]\s*)([A-Za-z_]\w*)(\s*:)")


def extract_candidate(raw_text: str) -> str:
    """Pick the text most likely to hold the JSON object.

    Order: a ```json fence, any fence, then the raw text itself (narrowed to
    its outermost braces when there is prose around them).
    """
    match = _JSON_FENCE.search(raw_text) or _ANY_FENCE.search(raw_text)
    if match:
        return match.group(1).strip()

    text = raw_text.strip()
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        return text[start : end + 1]
    return text


def normalize(candidate: str) -> str:
    """Apply every repair: whitespace, trailing commas, bare keys."""
    text = _collapse_whitespace(candidate)
    text = _TRAILING_COMMA.sub(r"\1", text)
    return _BARE_KEY.sub(r'\1"\2"\3', text)


def parse_response(raw_text: str) -> dict[str, Any]:
    """Parse raw model output into a JSON object.

    A lightly normalized candidate (whitespace only) is tried first so that
    string values containing ``word:`` or ``, }`` survive intact; the full
    repair pass runs only when that fails.

    Raises:
        MalformedProviderOutput: No JSON object could be recovered.
    """
    if not raw_text or not raw_text.strip():
        raise MalformedProviderOutput("empty response", snippet="")

    candidate = extract_candidate(raw_text)
    try:
        result = json.loads(_collapse_whitespace(candidate))
    except json.JSONDecodeError:
        try:
            result = json.loads(normalize(candidate))
        except json.JSONDecodeError as e:
            snippet = raw_text[:SNIPPET_LENGTH]
            logger.error("JSON parse error: %s", e)
            logger.debug("Raw response: %s...", snippet)
            raise MalformedProviderOutput(str(e), snippet=snippet) from e

    if not isinstance(result, dict):
        snippet = raw_text[:SNIPPET_LENGTH]
        logger.error("AI response is JSON but not an object: %s", type(result).__name__)
        raise MalformedProviderOutput(
            f"expected a JSON object, got {type(result).__name__}", snippet=snippet
        )
    return result


def _collapse_whitespace(text: str) -> str:
    return _LINE_BREAKS.sub(" ", text.replace("\u00a0", " "))
