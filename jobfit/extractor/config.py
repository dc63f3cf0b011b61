"""Configuration settings for job-description extraction."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExtractorConfig(BaseSettings):
    """LLM settings for turning a pasted job posting into requirements.

    All settings have sensible defaults and can be overridden via
    environment variables with EXTRACTOR_ prefix or a .env file.

    Attributes:
        llm_provider: LiteLLM provider prefix ("gemini", "openai", "anthropic", ...).
        llm_model: Model ID to use for extraction.
        llm_api_key: API key for the LLM provider.
        llm_base_url: Base URL for OpenAI-compatible endpoints.
        llm_timeout: Request timeout in seconds.
        llm_temperature: Sampling temperature.
        llm_max_retries: Retries after the first failed attempt.
        llm_reasoning_effort: Reasoning effort for models that support it.
        max_input_chars: Longest job description accepted.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXTRACTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    llm_provider: str = Field(
        default="gemini",
        description="LiteLLM provider: 'gemini', 'openai', 'anthropic', ...",
    )
    llm_model: str = Field(
        default="gemini-2.0-flash-lite",
        description="Model ID to use for extraction",
    )
    llm_api_key: str | None = Field(
        default=None,
        description="API key for the LLM provider",
    )
    llm_base_url: str | None = Field(
        default=None,
        description="Base URL for the LLM API (for OpenAI-compatible endpoints)",
    )
    llm_timeout: Annotated[float, Field(gt=0)] = Field(
        default=60.0,
        description="LLM request timeout in seconds",
    )
    llm_temperature: Annotated[float, Field(ge=0.0, le=2.0)] = Field(
        default=0.1,
        description="Sampling temperature (low for deterministic extraction)",
    )
    llm_max_retries: Annotated[int, Field(ge=0)] = Field(
        default=1,
        description="Retries after a failed LLM call",
    )
    llm_reasoning_effort: str | None = Field(
        default=None,
        description=(
            "Reasoning effort for supported models (e.g. 'none', 'minimal', 'low', "
            "'medium', 'high')."
        ),
    )

    max_input_chars: Annotated[int, Field(gt=0)] = Field(
        default=512 * 1024,
        description="Maximum job description length accepted for extraction",
    )


# Singleton instance for easy import
_extractor_config: ExtractorConfig | None = None


def get_extractor_config() -> ExtractorConfig:
    """Get the extractor configuration singleton."""
    global _extractor_config
    if _extractor_config is None:
        _extractor_config = ExtractorConfig()
    return _extractor_config


def reset_extractor_config() -> None:
    """Reset the extractor configuration singleton (useful for testing)."""
    global _extractor_config
    _extractor_config = None
