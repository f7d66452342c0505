"""Retry engine: run an operation until it succeeds or a policy gives up.

``execute_with_retry`` loops internally and resolves to exactly one terminal
``TaskResult``; intermediate failures are never observed by the caller.

Decision procedure after each attempt (shared with the resumable engine):
1. Any state other than ``Failed`` is returned unchanged.
2. A failure no classifier accepts is returned unchanged.
3. Otherwise every policy is advanced; any stop returns the failure unchanged.
4. If all policies continue, the operation is re-invoked with the successors,
   against the original start time.

With no bounding policy and a retriable failure the loop never ends. Bounding
the chain is the caller's responsibility.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Iterable, Sequence
from functools import wraps
from typing import Callable, TypeAlias, TypeVar

from taskretry.foundation.errors import PLACEHOLDER, TransportError, error_from_exception
from taskretry.foundation.result import Failed, Succeeded, TaskResult

from .classifier import FailureClassifier, matches
from .policy import SYSTEM_CLOCK, Clock, Policy, advance

T = TypeVar("T")

Operation: TypeAlias = Callable[[], Awaitable[TaskResult[T, TransportError]]]

logger = logging.getLogger("taskretry.retry")


def retriable_error(result: TaskResult[T, TransportError], classifiers: Iterable[FailureClassifier]) -> TransportError | None:
    """Error to retry on, or None when ``result`` is terminal.

    Non-failed states are coerced to the reserved placeholder, which no
    classifier accepts, so they fall through the same check as non-retriable
    failures.
    """
    err = result.unwrap_error() if result.is_failed() else PLACEHOLDER
    return err if matches(classifiers, err) else None


async def execute_with_retry(
    policies: Sequence[Policy],
    classifiers: Sequence[FailureClassifier],
    operation: Operation[T],
    *,
    clock: Clock | None = None,
) -> TaskResult[T, TransportError]:
    """Run ``operation`` under the given policies and classifiers.

    Args:
        policies: Stopping/delay policies, all advanced on every retriable failure
        classifiers: Failures eligible for retry (OR-composed; empty retries nothing)
        operation: Zero-argument coroutine function producing a TaskResult
        clock: Time source and sleeper (default: monotonic clock, asyncio.sleep)

    Returns:
        The first non-retriable result, or the failure that made a policy stop
    """
    clock = clock or SYSTEM_CLOCK
    started_at = clock.now_ms()
    current: tuple[Policy, ...] | None = tuple(policies)
    attempt = 0

    while True:
        result = await operation()
        attempt += 1
        if (err := retriable_error(result, classifiers)) is None:
            if result.is_failed():
                logger.debug(f"Attempt {attempt} failed with non-retriable error: {result.unwrap_error()}")
            return result
        if (current := await advance(started_at, current, err, clock)) is None:
            logger.debug(f"Giving up after {attempt} attempt(s) (error: {err})")
            return result
        logger.info(f"Retry {attempt} after {clock.now_ms() - started_at:.0f}ms (error: {err})")


# ─────────────────────────────────────────────────────────────────────────────
# Operation Adapters
# ─────────────────────────────────────────────────────────────────────────────


def lift(operation: Callable[[], Awaitable[T]]) -> Operation[T]:
    """Coerce an infallible coroutine function into the TaskResult shape."""
    @wraps(operation)
    async def lifted() -> TaskResult[T, TransportError]:
        return Succeeded(await operation())
    return lifted


def guard(operation: Callable[[], Awaitable[T]]) -> Operation[T]:
    """Turn exceptions raised by ``operation`` into ``Failed`` values.

    Exceptions are mapped with ``error_from_exception``: timeouts become
    ``TimedOut``, connection and name-resolution errors ``NetworkUnreachable``,
    anything else (including local file errors) ``CustomError``.
    """
    @wraps(operation)
    async def guarded() -> TaskResult[T, TransportError]:
        try:
            return Succeeded(await operation())
        except Exception as e:
            logger.debug(f"{getattr(operation, '__name__', 'operation')} raised {type(e).__name__}: {e}")
            return Failed(error_from_exception(e))
    return guarded
