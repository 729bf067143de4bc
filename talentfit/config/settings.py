"""Configuration settings for TalentFit."""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults and can be overridden via
    environment variables with `TALENTFIT_` prefix or a .env file.
    Scoring weights and thresholds live in ``ScoringConfig``.
    """

    model_config = SettingsConfigDict(
        env_prefix="TALENTFIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Paths
    default_workspace_path: Path = Field(
        default=Path("./data/workspace.yaml"),
        description="Workspace file (YAML/JSON) used when --workspace is omitted",
    )
    output_dir: Path = Field(
        default=Path("./artifacts"),
        description="Directory for written scoring/comparison reports",
    )

    # Presentation
    locale: Literal["en", "ru"] = Field(
        default="en",
        description="Locale for proficiency labels in readable output",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a known level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()


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
