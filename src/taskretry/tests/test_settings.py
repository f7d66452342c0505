"""Tests for environment-driven configuration."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from taskretry.foundation.config import (
    RetrySettings,
    TaskRetrySettings,
    clear_settings_cache,
    configure_logging,
    get_settings,
)


def test_defaults() -> None:
    settings = get_settings()
    assert settings.retry.max_retries == 3
    assert settings.retry.interval_ms == 500
    assert settings.retry.max_interval_ms == 3000
    assert settings.retry.max_duration_ms is None
    assert settings.retry.seed == 0
    assert settings.logging.level == "INFO"


def test_settings_are_cached() -> None:
    assert get_settings() is get_settings()


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASKRETRY_RETRY_MAX_RETRIES", "7")
    monkeypatch.setenv("TASKRETRY_RETRY_MAX_DURATION_MS", "2500")
    monkeypatch.setenv("TASKRETRY_LOG_LEVEL", "DEBUG")
    clear_settings_cache()
    settings = get_settings()
    assert settings.retry.max_retries == 7
    assert settings.retry.max_duration_ms == 2500
    assert settings.logging.level_no == logging.DEBUG


@pytest.mark.parametrize(
    "overrides",
    [
        {"max_retries": -1},
        {"max_retries": 101},
        {"interval_ms": 0},
        {"interval_ms": 1000, "max_interval_ms": 100},
        {"max_duration_ms": -5},
    ],
)
def test_invalid_retry_settings(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        RetrySettings(**overrides)


def test_configure_logging_sets_package_level(monkeypatch: pytest.MonkeyPatch) -> None:
    log = logging.getLogger("taskretry")
    monkeypatch.setattr(log, "level", log.level)
    monkeypatch.setenv("TASKRETRY_LOG_LEVEL", "WARNING")
    assert configure_logging(TaskRetrySettings()) is log
    assert log.level == logging.WARNING
