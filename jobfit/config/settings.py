"""Configuration settings for the Job Fit Analyzer."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults and can be overridden via
    environment variables or a .env file. LLM settings for job-description
    extraction live in `ExtractorConfig` (EXTRACTOR_ prefix).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Data sources
    portfolio_path: Path = Field(
        default=Path("data/portfolio.yaml"),
        description="Path to the portfolio data file (YAML/JSON)",
    )
    scoring_rules_path: Path | None = Field(
        default=None,
        description="Path to a scoring rules file (YAML/JSON); built-in rules if unset",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR",
    )

    @field_validator("scoring_rules_path", mode="before")
    @classmethod
    def empty_rules_path_is_none(cls, v: object) -> object:
        """Treat an empty SCORING_RULES_PATH as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a known level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()


# Singleton instance for easy import
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the application settings singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (useful for testing)."""
    global _settings
    _settings = None
