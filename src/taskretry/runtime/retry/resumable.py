"""Resumable retry engine: hand control back to the caller between attempts.

Instead of looping internally, every retriable failure produces a
``Suspended`` context and stops. The caller can run any side effect using the
carried ``last_error`` (refresh a credential, prompt the user, ...) and then
resume. Resuming advances the policies exactly like ``execute_with_retry``
would and either re-invokes the operation or finishes with the failure.

State Machine:
    start    → attempt → Finished(result)     (success / non-retriable failure)
                       → Suspended(ctx)        (retriable failure)
    resume   → policies stop     → Finished(Failed(last_error))
             → policies continue → attempt → Finished | Suspended

Contexts are plain data owned by the caller. Resuming a ``Finished`` context
is a precondition violation and raises ``ContextFinishedError``. Abandoning a
``Suspended`` context (never resuming it) is allowed.

Example:
    >>> async def on_suspend(ctx: Suspended) -> None:
    ...     pending.append(ctx)
    >>> await resumable_with([max_retries(3)], [on_unauthenticated_status], on_suspend, fetch_profile)
    >>> # later, from the host's own loop:
    >>> await resume(refresh_token, show_profile, pending.pop())
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeAlias, TypeVar

from taskretry.foundation.errors import ContextFinishedError, TransportError
from taskretry.foundation.result import Failed, TaskResult

from .classifier import FailureClassifier
from .engine import Operation, retriable_error
from .policy import SYSTEM_CLOCK, Clock, Policy, advance

T = TypeVar("T")

# Handlers may be plain callables or coroutine functions
Handler: TypeAlias = Callable[[Any], Any]

logger = logging.getLogger("taskretry.retry.resumable")


@dataclass(frozen=True, slots=True)
class Suspended(Generic[T]):
    """Snapshot taken right after a retriable failure, before the next attempt.

    Attributes:
        started_at_ms: Time of the first attempt, fixed for the whole chain
        last_error: Failure that caused the suspension
        operation: Operation to re-invoke on resume
        classifiers: Failures eligible for retry
        policies: Current policy states
        on_suspend: Where further suspensions of this chain are delivered
    """

    started_at_ms: float
    last_error: TransportError
    operation: Operation[T]
    classifiers: tuple[FailureClassifier, ...]
    policies: tuple[Policy, ...]
    on_suspend: Handler | None = None


@dataclass(frozen=True, slots=True)
class Finished(Generic[T]):
    """Terminal context wrapping the final result."""
    result: TaskResult[T, TransportError]


RetryContext: TypeAlias = Suspended | Finished


async def _call(handler: Handler, arg: object) -> None:
    if inspect.isawaitable(out := handler(arg)):
        await out


def _settle(
    result: TaskResult[T, TransportError],
    started_at_ms: float,
    operation: Operation[T],
    classifiers: tuple[FailureClassifier, ...],
    policies: tuple[Policy, ...],
    on_suspend: Handler | None,
) -> RetryContext:
    if (err := retriable_error(result, classifiers)) is None:
        return Finished(result)
    logger.info(f"Suspending retry chain (error: {err})")
    return Suspended(started_at_ms, err, operation, classifiers, policies, on_suspend)


async def _deliver(context: RetryContext, on_finished: Handler | None) -> None:
    match context:
        case Suspended(on_suspend=handler) if handler is not None:
            await _call(handler, context)
        case Finished(result=result) if on_finished is not None:
            await _call(on_finished, result)


# ─────────────────────────────────────────────────────────────────────────────
# Pure Steps
# ─────────────────────────────────────────────────────────────────────────────


async def start(
    policies: Sequence[Policy],
    classifiers: Sequence[FailureClassifier],
    operation: Operation[T],
    *,
    on_suspend: Handler | None = None,
    clock: Clock | None = None,
) -> RetryContext:
    """Run the first attempt. Never suspends before an attempt has been made."""
    started_at = (clock or SYSTEM_CLOCK).now_ms()
    result = await operation()
    return _settle(result, started_at, operation, tuple(classifiers), tuple(policies), on_suspend)


async def step(context: RetryContext, *, clock: Clock | None = None) -> RetryContext:
    """Advance a suspended chain by one attempt.

    Raises:
        ContextFinishedError: ``context`` is already ``Finished``
    """
    if not isinstance(context, Suspended):
        raise ContextFinishedError()
    successors = await advance(context.started_at_ms, context.policies, context.last_error, clock or SYSTEM_CLOCK)
    if successors is None:
        logger.debug(f"Retry chain stopped (error: {context.last_error})")
        return Finished(Failed(context.last_error))
    result = await context.operation()
    return _settle(result, context.started_at_ms, context.operation, context.classifiers, successors, context.on_suspend)


# ─────────────────────────────────────────────────────────────────────────────
# Host Entry Points
# ─────────────────────────────────────────────────────────────────────────────


async def resumable_with(
    policies: Sequence[Policy],
    classifiers: Sequence[FailureClassifier],
    on_suspend: Handler,
    operation: Operation[T],
    *,
    on_finished: Handler | None = None,
    clock: Clock | None = None,
) -> RetryContext:
    """Start a resumable chain.

    A retriable failure is delivered to ``on_suspend`` as a ``Suspended``
    context; a terminal first attempt goes to ``on_finished`` if given.
    The resulting context is also returned.
    """
    context = await start(policies, classifiers, operation, on_suspend=on_suspend, clock=clock)
    await _deliver(context, on_finished)
    return context


async def resume(
    side_effect: Handler,
    on_finished: Handler,
    context: RetryContext,
    *,
    clock: Clock | None = None,
) -> RetryContext:
    """Run ``side_effect(last_error)``, then advance the chain one step.

    A new suspension is delivered to the context's ``on_suspend``; a terminal
    result to ``on_finished``.

    Raises:
        ContextFinishedError: ``context`` is already ``Finished``
    """
    if not isinstance(context, Suspended):
        raise ContextFinishedError()
    await _call(side_effect, context.last_error)
    nxt = await step(context, clock=clock)
    await _deliver(nxt, on_finished)
    return nxt


async def run_resumable(
    policies: Sequence[Policy],
    classifiers: Sequence[FailureClassifier],
    operation: Operation[T],
    side_effect: Handler | None = None,
    *,
    clock: Clock | None = None,
) -> TaskResult[T, TransportError]:
    """Drive a resumable chain to completion, running ``side_effect`` at every suspension."""
    context = await start(policies, classifiers, operation, clock=clock)
    while isinstance(context, Suspended):
        if side_effect is not None:
            await _call(side_effect, context.last_error)
        context = await step(context, clock=clock)
    return context.result
