"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated defaults for retry strategies and logging.
Supports .env files and nested configuration.

Example:
    >>> from taskretry.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.retry.max_retries
    3
    >>> settings.logging.level
    'INFO'

    # Or with environment variables:
    # TASKRETRY_RETRY_MAX_RETRIES=5
    # TASKRETRY_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, NonNegativeFloat, NonNegativeInt, PositiveFloat, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RetrySettings(BaseSettings):
    """Default retry strategy configuration (all durations in milliseconds)."""

    model_config = SettingsConfigDict(
        env_prefix="TASKRETRY_RETRY_",
        extra="ignore",
    )

    max_retries: Annotated[int, Field(ge=0, le=100)] = 3
    interval_ms: PositiveFloat = Field(default=500.0, description="First backoff interval")
    max_interval_ms: PositiveFloat = Field(default=3000.0, description="Backoff interval cap")
    max_duration_ms: NonNegativeFloat | None = Field(default=None, description="Overall time budget, unbounded if unset")
    seed: NonNegativeInt = Field(default=0, description="Jitter seed for fresh backoff policies")

    @model_validator(mode="after")
    def _check_interval_cap(self) -> RetrySettings:
        if self.max_interval_ms < self.interval_ms:
            raise ValueError("max_interval_ms must be >= interval_ms")
        return self


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TASKRETRY_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @computed_field
    @property
    def level_no(self) -> int:
        """Numeric level for the stdlib logging module."""
        return logging.getLevelName(self.level)


class TaskRetrySettings(BaseSettings):
    """Root settings for taskretry.

    Loads configuration from environment variables with TASKRETRY_ prefix.

    Example environment variables:
        TASKRETRY_RETRY_MAX_RETRIES=5
        TASKRETRY_RETRY_INTERVAL_MS=250
        TASKRETRY_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="TASKRETRY_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    retry: RetrySettings = Field(default_factory=RetrySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> TaskRetrySettings:
    """Get the global settings instance (cached)."""
    return TaskRetrySettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()


def configure_logging(settings: TaskRetrySettings | None = None) -> logging.Logger:
    """Apply the configured level to the ``taskretry`` logger hierarchy."""
    log = logging.getLogger("taskretry")
    log.setLevel((settings or get_settings()).logging.level_no)
    return log
