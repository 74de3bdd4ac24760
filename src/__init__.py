# src/__init__.py — v1
"""resumeai — AI analysis orchestration with content-addressed dedup."""

from resumeai.version import __version__

__all__ = ["__version__"]
