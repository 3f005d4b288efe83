"""Environment-based configuration using pydantic-settings.

Example:
    >>> from reasoned.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.capture.include_traceback
    True

    # Or with environment variables:
    # REASONED_LOG_LEVEL=DEBUG
    # REASONED_CAPTURE_INCLUDE_TRACEBACK=false
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="REASONED_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class CaptureSettings(BaseSettings):
    """How the Try boundary records captured exceptions."""

    model_config = SettingsConfigDict(
        env_prefix="REASONED_CAPTURE_",
        extra="ignore",
    )

    include_traceback: bool = Field(default=True, description="Store formatted traceback in ExceptionalError.details")
    log_captured: bool = Field(default=True, description="Emit a debug log entry for each captured exception")


class ReasonedSettings(BaseSettings):
    """Root settings, loaded from REASONED_* environment variables and .env."""

    model_config = SettingsConfigDict(
        env_prefix="REASONED_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode")
    environment: Literal["development", "staging", "production"] = "development"

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    capture: CaptureSettings = Field(default_factory=CaptureSettings)

    @field_validator("environment", mode="before")
    @classmethod
    def _normalize_env(cls, v: str) -> str:
        """Normalize environment name to lowercase."""
        return v.lower() if isinstance(v, str) else v

    @computed_field
    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> ReasonedSettings:
    """Get the global settings instance (cached)."""
    return ReasonedSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
