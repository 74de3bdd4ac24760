# src/cache/base_result_cache.py — v1
"""Abstract result cache interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from resumeai.cache.models import CacheEntry


class BaseResultCache(ABC):
    """Unified interface for result cache backends.

    ``get`` only ever returns live entries; expiry is enforced lazily at
    lookup time by each backend. Returned entries never share payload
objects with what the backend keeps.
    """

    @abstractmethod
    async def get(self, fingerprint: str) -> CacheEntry | None:
        """Return the live entry for a fingerprint, or None."""

    @abstractmethod
    async def put(self, entry: CacheEntry) -> None:
        """Store an entry under its fingerprint."""

    @abstractmethod
    async def delete(self, fingerprint: str) -> bool:
        """Remove an entry. Returns True if something was removed."""

    @abstractmethod
    async def size(self) -> int:
        """Number of stored entries (expired ones may still be counted)."""
