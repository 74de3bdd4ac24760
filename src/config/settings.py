# src/config/settings.py — v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for provider credentials, cache, quota, retry and
logging settings. Every value is injected into the orchestrator at
construction time; nothing reads the environment after startup.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === LLM PROVIDER ===
    llm_provider: Literal["google", "openai", "anthropic"] = "google"
    llm_model: str = "gemini-2.0-flash"

    # Provider API keys
    gemini_api_key: str = ""
    openai_api_key: str = ""
    anthropic_api_key: str = ""

    # Generation config (most deterministic settings)
    llm_temperature: float = 0.0
    llm_max_output_tokens: int = 8192
    llm_top_p: float = 1.0
    llm_top_k: int = 1

    # === Retry ===
    llm_max_attempts: int = 3
    llm_retry_base_delay_s: float = 1.0

    # === Result cache ===
    cache_backend: Literal["memory", "redis"] = "memory"
    cache_ttl_s: int = 24 * 60 * 60
    cache_redis_url: str = ""
    cache_redis_prefix: str = "resumeai:analysis:"

    # === Quota ===
    user_hourly_limit: int = 50

    # === Input validation ===
    min_content_chars: int = 100
    min_reference_chars: int = 50

    # === Persistent dedup ===
    record_store_path: Path = Path("~/.resumeai/records.db")
    record_subject_table: str = "resumes"

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: str = ""
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("llm_retry_base_delay_s")
    @classmethod
    def validate_base_delay(cls, v: float) -> float:  # noqa: N805
        if v < 0:
            raise ValueError("llm_retry_base_delay_s must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.cache_ttl_s <= 0:
            errors.append("CACHE_TTL_S must be > 0")

        if self.user_hourly_limit <= 0:
            errors.append("USER_HOURLY_LIMIT must be > 0")

        if self.llm_max_attempts < 1:
            errors.append("LLM_MAX_ATTEMPTS must be >= 1")

        if self.cache_backend == "redis" and not self.cache_redis_url:
            errors.append("CACHE_REDIS_URL must be set when CACHE_BACKEND=redis")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def provider_api_key(self) -> str:
        """API key for the configured provider."""
        return {
            "google": self.gemini_api_key,
            "openai": self.openai_api_key,
            "anthropic": self.anthropic_api_key,
        }[self.llm_provider]


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or CLI flags).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
