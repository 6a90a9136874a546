"""Environment-driven configuration helpers for BetBuddy."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or .env files."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    openai_api_key: str = Field(default="", validation_alias="OPENAI_API_KEY")
    vision_model: str = Field(default="gpt-4o", validation_alias="VISION_MODEL")
    vision_max_tokens: int = Field(default=4000, ge=1, validation_alias="VISION_MAX_TOKENS")

    perplexity_api_key: str = Field(default="", validation_alias="PERPLEXITY_API_KEY")
    perplexity_base_url: str = Field(
        default="https://api.perplexity.ai",
        validation_alias="PERPLEXITY_BASE_URL",
    )
    narrative_model: str = Field(default="sonar-deep-research", validation_alias="NARRATIVE_MODEL")
    # deep-research completions routinely take several minutes
    narrative_timeout_seconds: float = Field(
        default=600.0,
        gt=0.0,
        validation_alias="NARRATIVE_TIMEOUT_SECONDS",
    )

    max_upload_bytes: int = Field(default=10 * 1024 * 1024, ge=1, validation_alias="MAX_UPLOAD_BYTES")

    api_base_url: str = Field(default="http://localhost:8000", validation_alias="BETBUDDY_API_URL")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()  # type: ignore[call-arg]


def get_openai_api_key() -> str:
    """Return the OpenAI API key or raise a helpful error."""

    key = os.getenv("OPENAI_API_KEY") or get_settings().openai_api_key
    if not key:
        raise RuntimeError(
            "OPENAI_API_KEY is not configured. "
            "Set it in .env for local dev or in the deployment environment."
        )
    return key


def get_perplexity_api_key() -> str:
    key = os.getenv("PERPLEXITY_API_KEY") or get_settings().perplexity_api_key
    if not key:
        raise RuntimeError(
            "PERPLEXITY_API_KEY is not configured. Set it in your environment or .env file."
        )
    return key
