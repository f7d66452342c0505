"""Configuration management using pydantic-settings."""

from .settings import (
    LoggingSettings,
    RetrySettings,
    TaskRetrySettings,
    clear_settings_cache,
    configure_logging,
    get_settings,
)

__all__ = [
    "LoggingSettings",
    "RetrySettings",
    "TaskRetrySettings",
    "clear_settings_cache",
    "configure_logging",
    "get_settings",
]
