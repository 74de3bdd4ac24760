# src/cache/fingerprint.py — v3
"""Content fingerprints used as equality keys.

Two independent namespaces share the same digest:
  - prompt fingerprints key the result cache (fully rendered prompt),
  - content fingerprints key persisted AnalysisRecords (raw input text).
They must never be looked up in each other's store.
"""

from __future__ import annotations

import hashlib

FINGERPRINT_LENGTH = 64


def fingerprint(text: str) -> str:
    """SHA-256 hex digest of the UTF-8 encoded text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def prompt_fingerprint(prompt: str) -> str:
    """Result-cache key over the fully rendered prompt."""
    return fingerprint(prompt)


def content_fingerprint(*parts: str) -> str:
    """Persistent-dedup key over raw input content.

    Parts are concatenated without a separator (resume text, then the
    job description when matching against one).
    """
    return fingerprint("".join(parts))


def short(fp: str) -> str:
    """Truncated form for log lines."""
    return f"{fp[:8]}..."
