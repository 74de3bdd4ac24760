# tests/conftest.py — v2
"""Shared test fixtures for all unit and integration tests.

Provides a scripted fake LLM client, a controllable clock, sample resume
and job-description texts, and settings with zero backoff.
No external dependencies — all I/O is faked.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from resumeai.config.settings import Settings
from resumeai.dedup.memory_store import InMemoryRecordStore
from resumeai.llm.base_client import BaseLLMClient
from resumeai.llm.models import GenerationConfig, LLMResponse
from resumeai.pipeline.orchestrator import AnalysisOrchestrator

DEFAULT_REPLY = '```json\n{"Final_Scoring": {"Overall_Resume_Score": 82}}\n```'


class FakeLLMClient(BaseLLMClient):
    """Replays scripted replies; an Exception item is raised instead."""

    def __init__(
        self,
        replies: list[str | BaseException] | None = None,
        default: str = DEFAULT_REPLY,
        delay_s: float = 0.0,
    ) -> None:
        self.replies = list(replies or [])
        self.default = default
        self.delay_s = delay_s
        self.calls: list[tuple[str, GenerationConfig]] = []

    async def generate(self, prompt: str, config: GenerationConfig) -> LLMResponse:
        self.calls.append((prompt, config))
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        reply = self.replies.pop(0) if self.replies else self.default
        if isinstance(reply, BaseException):
            raise reply
        return LLMResponse(
            content=reply, model="fake-model", provider="fake", latency_ms=1
        )

    @property
    def provider_name(self) -> str:
        return "fake"

    @property
    def model(self) -> str:
        return "fake-model"


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class SleepRecorder:
    """Drop-in for asyncio.sleep that records delays without waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


# === FIXTURES: Sample data ===


@pytest.fixture
def resume_text() -> str:
    """Resume text comfortably above the 100-char minimum."""
    return (
        "Jane Doe - Software Engineer\n"
        "Experience: Built REST APIs in Python and FastAPI at Acme Corp, "
        "reducing latency by 40%. Led migration to PostgreSQL.\n"
        "Education: B.Sc. Computer Science, State University, 2021.\n"
        "Skills: Python, Docker, Kubernetes, React, SQL."
    )


@pytest.fixture
def job_description() -> str:
    """Job description above the 50-char minimum."""
    return (
        "Backend Engineer: Python, FastAPI, PostgreSQL, Docker. "
        "3+ years building production APIs."
    )


# === FIXTURES: Collaborators ===


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from .env, with instant backoff."""
    return Settings(_env_file=None, llm_retry_base_delay_s=0.0)


@pytest.fixture
def fake_client() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture
def make_client():
    """Factory for scripted fake clients."""
    return FakeLLMClient


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def orchestrator(fake_client, settings, clock, sleep_recorder) -> AnalysisOrchestrator:
    return AnalysisOrchestrator(
        fake_client, settings=settings, clock=clock, sleep=sleep_recorder
    )


@pytest.fixture
def record_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()
