"""Exception mapping and precondition errors.

Operation failures are data (``Failed``). Exceptions are only raised for
caller mistakes: an invalid policy configuration or resuming a finished retry
chain.
"""

from __future__ import annotations

import socket
from functools import lru_cache

from .types import CustomError, NetworkUnreachable, TimedOut, TransportError


class RetryError(Exception):
    """Base class for taskretry precondition violations."""


class ContextFinishedError(RetryError):
    """A ``Finished`` retry context was handed back to ``resume``."""

    def __init__(self, message: str = "cannot resume a finished retry context") -> None:
        super().__init__(message)


class InvalidPolicyError(RetryError, ValueError):
    """Policy constructed with an impossible budget or interval."""


# Socket-level failures only; other OSErrors (missing files, permissions) stay CustomError
_EXCEPTION_KINDS: tuple[tuple[type[BaseException], type[TimedOut] | type[NetworkUnreachable]], ...] = (
    (TimeoutError, TimedOut),
    (ConnectionError, NetworkUnreachable),
    (socket.gaierror, NetworkUnreachable),
)

_PATTERN_KINDS: dict[str, type[TimedOut] | type[NetworkUnreachable]] = {
    "timeout": TimedOut,
    "timed out": TimedOut,
    "unreachable": NetworkUnreachable,
    "connection": NetworkUnreachable,
    "network": NetworkUnreachable,
}


@lru_cache(maxsize=256)
def _classify_cached(exc_key: str) -> type[TimedOut] | type[NetworkUnreachable] | None:
    """Cached classification by exception signature."""
    haystack = exc_key.lower()
    for pattern, kind in _PATTERN_KINDS.items():
        if pattern in haystack:
            return kind
    return None


def error_from_exception(exc: BaseException) -> TransportError:
    """Map an exception raised by a transport into the error taxonomy.

    Uses the exception type first, then falls back to pattern matching on the
    exception name and message. Anything unrecognized becomes ``CustomError``.
    """
    for exc_type, kind in _EXCEPTION_KINDS:
        if isinstance(exc, exc_type):
            return kind()
    if (kind := _classify_cached(f"{type(exc).__name__} {exc}")) is not None:
        return kind()
    return CustomError(message=str(exc) or type(exc).__name__)
