"""taskretry - Composable retry policies for four-state asynchronous operations.

Operations resolve to a ``TaskResult`` (NotRequested / Pending / Succeeded /
Failed). Retry behavior is assembled from independent policies and failure
classifiers, then applied by one of two engines:

Synchronous-style engine (loops internally):
    >>> from taskretry import (
    ...     execute_with_retry, max_retries, exponential_backoff, on_status, on_network_error,
    ... )
    >>>
    >>> result = await execute_with_retry(
    ...     [max_retries(3), exponential_backoff(500, 3000)],
    ...     [on_status(503), on_network_error],
    ...     fetch_profile,
    ... )

Resumable engine (hands control back after every retriable failure):
    >>> from taskretry import resumable_with, resume, on_unauthenticated_status
    >>>
    >>> ctx = await resumable_with([max_retries(1)], [on_unauthenticated_status], inbox.append, fetch_profile)
    >>> # ...refresh the credential, then:
    >>> await resume(refresh_token, show_profile, inbox.pop())

Fluent builder:
    >>> from taskretry import RetryStrategy, on_timeout
    >>> strategy = RetryStrategy().with_max_retries(3).with_constant_interval(250).on(on_timeout)
    >>> result = await strategy.execute(fetch_profile)
"""

from __future__ import annotations

__version__ = "0.1.0"

from .foundation import (
    PLACEHOLDER,
    BadStatus,
    ContextFinishedError,
    CustomError,
    Failed,
    InvalidPolicyError,
    NetworkUnreachable,
    NotRequested,
    Pending,
    RetryError,
    State,
    Succeeded,
    TaskResult,
    TimedOut,
    TransportError,
    error_from_exception,
    is_placeholder,
)
from .foundation.config import TaskRetrySettings, configure_logging, get_settings
from .runtime.retry import (
    SYSTEM_CLOCK,
    BackoffGenerator,
    Clock,
    ConstantInterval,
    ExponentialBackoff,
    FailureClassifier,
    Finished,
    MaxDuration,
    MaxRetries,
    Policy,
    RetryContext,
    RetryStrategy,
    Suspended,
    classifier,
    constant_interval,
    execute_with_retry,
    exponential_backoff,
    guard,
    lift,
    matches,
    max_duration,
    max_retries,
    on_all_failures,
    on_network_error,
    on_status,
    on_timeout,
    on_unauthenticated_status,
    on_unauthorized_status,
    resumable_with,
    resume,
    retrying,
    run_resumable,
    start,
    step,
)

__all__ = [
    "__version__",
    # Results & errors
    "TaskResult", "State", "NotRequested", "Pending", "Succeeded", "Failed",
    "TransportError", "BadStatus", "NetworkUnreachable", "TimedOut", "CustomError",
    "PLACEHOLDER", "is_placeholder", "error_from_exception",
    "RetryError", "ContextFinishedError", "InvalidPolicyError",
    # Config
    "TaskRetrySettings", "get_settings", "configure_logging",
    # Classifiers
    "FailureClassifier", "classifier", "matches",
    "on_status", "on_unauthenticated_status", "on_unauthorized_status",
    "on_network_error", "on_timeout", "on_all_failures",
    # Policies
    "Policy", "MaxRetries", "MaxDuration", "ConstantInterval", "ExponentialBackoff",
    "max_retries", "max_duration", "constant_interval", "exponential_backoff",
    "BackoffGenerator", "Clock", "SYSTEM_CLOCK",
    # Engines
    "execute_with_retry", "lift", "guard",
    "RetryContext", "Suspended", "Finished", "start", "step", "resumable_with", "resume", "run_resumable",
    # Strategy
    "RetryStrategy", "retrying",
]
