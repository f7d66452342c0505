"""Error handling for taskretry.

- TransportError: BadStatus / NetworkUnreachable / TimedOut / CustomError union
- PLACEHOLDER: reserved error that no classifier ever matches
- error_from_exception: map raised exceptions into the taxonomy
- RetryError and subclasses: precondition violations
"""

from .errors import ContextFinishedError, InvalidPolicyError, RetryError, error_from_exception
from .types import (
    PLACEHOLDER,
    BadStatus,
    CustomError,
    NetworkUnreachable,
    TimedOut,
    TransportError,
    dump_error,
    is_placeholder,
    validate_error,
)

__all__ = [
    # Taxonomy
    "TransportError", "BadStatus", "NetworkUnreachable", "TimedOut", "CustomError",
    "PLACEHOLDER", "is_placeholder", "validate_error", "dump_error",
    # Exceptions
    "RetryError", "ContextFinishedError", "InvalidPolicyError", "error_from_exception",
]
