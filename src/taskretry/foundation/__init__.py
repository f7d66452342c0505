"""Foundation layer: error taxonomy, four-state results, configuration."""

from .errors import (
    PLACEHOLDER,
    BadStatus,
    ContextFinishedError,
    CustomError,
    InvalidPolicyError,
    NetworkUnreachable,
    RetryError,
    TimedOut,
    TransportError,
    error_from_exception,
    is_placeholder,
)
from .result import Failed, NotRequested, Pending, State, Succeeded, TaskResult

__all__ = [
    "TransportError", "BadStatus", "NetworkUnreachable", "TimedOut", "CustomError",
    "PLACEHOLDER", "is_placeholder", "error_from_exception",
    "RetryError", "ContextFinishedError", "InvalidPolicyError",
    "TaskResult", "State", "NotRequested", "Pending", "Succeeded", "Failed",
]
