"""
Application configuration via environment variables.

Uses Pydantic BaseSettings to load and validate all config from env vars
or a .env.local file. Every setting has a default that lets the rule-based
pipeline run with no configuration at all; the AI analysis path switches
on only when a Gemini API key is present.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment selector."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """
    Central configuration for the OCR categorizer.

    Values are loaded from environment variables first, falling back
    to a `.env.local` file in the project root. Secrets should NEVER
    be committed.
    """

    model_config = SettingsConfigDict(
        env_file=".env.local",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Environment ──────────────────────────────────────────────
    environment: Environment = Environment.DEVELOPMENT

    # ── Gemini analysis ──────────────────────────────────────────
    gemini_api_key: str = Field(default="", description="Google Gemini API key; empty disables AI analysis")
    gemini_model: str = Field(default="gemini-1.5-flash-latest", description="Gemini model name")
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/models",
        description="Base URL of the Gemini models endpoint",
    )
    gemini_timeout_seconds: float = Field(default=30.0, gt=0, le=300, description="HTTP timeout for one analysis call")
    gemini_temperature: float = Field(default=0.3, ge=0.0, le=2.0, description="Sampling temperature")
    gemini_max_output_tokens: int = Field(default=2048, ge=128, le=8192, description="Response token cap")

    # ── Feature Flags ────────────────────────────────────────────
    feature_ai_analysis: bool = Field(default=True, description="Try AI analysis before the rule-based engine")

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO", description="Root log level")

    # ── Derived helpers ──────────────────────────────────────────

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    @property
    def ai_analysis_enabled(self) -> bool:
        return self.feature_ai_analysis and bool(self.gemini_api_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return cached Settings instance.

    Using lru_cache ensures we read env vars exactly once, and every
    module that calls ``get_settings()`` gets the same object.
    """
    return Settings()
