"""Retry policies and engines for four-state asynchronous operations.

Attach stopping/delay policies and failure classifiers to any operation that
resolves to a ``TaskResult``; the engine re-issues it until it succeeds, fails
in a non-retriable way, or a policy gives up.

Example:
    >>> from taskretry.runtime.retry import (
    ...     execute_with_retry, exponential_backoff, max_retries, on_status, on_timeout,
    ... )
    >>>
    >>> result = await execute_with_retry(
    ...     [max_retries(3), exponential_backoff(500, 3000)],
    ...     [on_status(503), on_timeout],
    ...     fetch_profile,
    ... )
"""

from .backoff import BackoffGenerator
from .classifier import (
    FailureClassifier,
    classifier,
    matches,
    on_all_failures,
    on_network_error,
    on_status,
    on_timeout,
    on_unauthenticated_status,
    on_unauthorized_status,
)
from .engine import Operation, execute_with_retry, guard, lift, retriable_error
from .policy import (
    SYSTEM_CLOCK,
    Clock,
    ConstantInterval,
    Continue,
    Decision,
    ExponentialBackoff,
    MaxDuration,
    MaxRetries,
    Policy,
    Stop,
    advance,
    constant_interval,
    exponential_backoff,
    max_duration,
    max_retries,
    transition,
)
from .resumable import Finished, RetryContext, Suspended, resumable_with, resume, run_resumable, start, step
from .strategy import RetryStrategy, retrying

__all__ = [
    # Classifiers
    "FailureClassifier", "classifier", "matches",
    "on_status", "on_unauthenticated_status", "on_unauthorized_status",
    "on_network_error", "on_timeout", "on_all_failures",
    # Policies
    "Policy", "MaxRetries", "MaxDuration", "ConstantInterval", "ExponentialBackoff",
    "max_retries", "max_duration", "constant_interval", "exponential_backoff",
    "Decision", "Continue", "Stop", "transition", "advance",
    "BackoffGenerator", "Clock", "SYSTEM_CLOCK",
    # Engines
    "Operation", "execute_with_retry", "retriable_error", "lift", "guard",
    "RetryContext", "Suspended", "Finished", "start", "step", "resumable_with", "resume", "run_resumable",
    # Strategy
    "RetryStrategy", "retrying",
]
