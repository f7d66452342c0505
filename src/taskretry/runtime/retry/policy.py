"""Retry policies as explicit tagged variants.

Each policy is an immutable automaton. On every retriable failure the engine
calls ``transition`` which either continues with a successor policy of the
same kind (possibly after sleeping) or stops the chain:

    MaxRetries(n)           stop if n <= 0, else continue as MaxRetries(n - 1)
    MaxDuration(d)          stop if now - started_at >= d, else continue unchanged
    ConstantInterval(ms)    sleep ms, continue unchanged
    ExponentialBackoff(g)   sleep g.interval_ms, continue with g.next()

All durations are milliseconds. Time and sleeping go through a ``Clock`` so the
whole state machine can run on virtual time.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Sequence
from dataclasses import dataclass
from typing import Callable, TypeAlias

from taskretry.foundation.errors import InvalidPolicyError, TransportError

from .backoff import DEFAULT_SEED, BackoffGenerator

logger = logging.getLogger("taskretry.retry.policy")


# ─────────────────────────────────────────────────────────────────────────────
# Clock
# ─────────────────────────────────────────────────────────────────────────────


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


async def _sleep_ms(ms: float) -> None:
    await asyncio.sleep(ms / 1000)


@dataclass(frozen=True, slots=True)
class Clock:
    """Source of the current time and of delays, both in milliseconds."""

    now_ms: Callable[[], float] = _monotonic_ms
    sleep_ms: Callable[[float], Awaitable[None]] = _sleep_ms


SYSTEM_CLOCK = Clock()


# ─────────────────────────────────────────────────────────────────────────────
# Policy Variants
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class MaxRetries:
    """Bounded retry count. Never sleeps."""
    remaining: int


@dataclass(frozen=True, slots=True)
class MaxDuration:
    """Bounded elapsed time since the first attempt. Never sleeps."""
    duration_ms: float


@dataclass(frozen=True, slots=True)
class ConstantInterval:
    """Fixed delay before every retry. Never stops."""
    interval_ms: float


@dataclass(frozen=True, slots=True)
class ExponentialBackoff:
    """Jittered exponential delay before every retry. Never stops."""
    generator: BackoffGenerator

    @property
    def interval_ms(self) -> float:
        return self.generator.interval_ms

    @property
    def max_interval_ms(self) -> float:
        return self.generator.max_interval_ms


Policy: TypeAlias = MaxRetries | MaxDuration | ConstantInterval | ExponentialBackoff


@dataclass(frozen=True, slots=True)
class Continue:
    """Transition outcome: retry, with ``policy`` replacing the old one."""
    policy: Policy


@dataclass(frozen=True, slots=True)
class Stop:
    """Transition outcome: give up, reporting the error that triggered it."""
    error: TransportError


Decision: TypeAlias = Continue | Stop


# ─────────────────────────────────────────────────────────────────────────────
# Constructors
# ─────────────────────────────────────────────────────────────────────────────


def _non_negative(name: str, value: float) -> None:
    if value < 0:
        raise InvalidPolicyError(f"{name} must be >= 0, got {value}")


def max_retries(count: int) -> MaxRetries:
    """Allow ``count`` retries after the initial attempt."""
    _non_negative("count", count)
    return MaxRetries(count)


def max_duration(milliseconds: float) -> MaxDuration:
    """Refuse to start a new attempt once ``milliseconds`` have elapsed.

    Does not sleep: combine with an interval policy to avoid busy-looping.
    Elapsed time is checked when the failure is handled, while the other
    policies start their delays, so the delay about to be waited is not
    counted. A chain can overshoot the budget by up to the longest delay in
    the policy list.
    """
    _non_negative("milliseconds", milliseconds)
    return MaxDuration(milliseconds)


def constant_interval(milliseconds: float) -> ConstantInterval:
    """Wait exactly ``milliseconds`` before every retry."""
    _non_negative("milliseconds", milliseconds)
    return ConstantInterval(milliseconds)


def exponential_backoff(interval: float, max_interval: float, *, seed: int = DEFAULT_SEED) -> ExponentialBackoff:
    """Wait ``interval`` first, then jittered growing intervals capped at ``max_interval``.

    Every fresh policy starts from ``seed``; pass distinct seeds to decorrelate
    chains built at the same call site.
    """
    _non_negative("interval", interval)
    if max_interval < interval:
        raise InvalidPolicyError(f"max_interval ({max_interval}) must be >= interval ({interval})")
    return ExponentialBackoff(BackoffGenerator(interval, max_interval, seed))


# ─────────────────────────────────────────────────────────────────────────────
# Transitions
# ─────────────────────────────────────────────────────────────────────────────


async def transition(started_at_ms: float, policy: Policy, error: TransportError, clock: Clock = SYSTEM_CLOCK) -> Decision:
    """Advance one policy after a retriable failure."""
    match policy:
        case MaxRetries(remaining=n):
            return Stop(error) if n <= 0 else Continue(MaxRetries(n - 1))
        case MaxDuration(duration_ms=d):
            return Stop(error) if clock.now_ms() - started_at_ms >= d else Continue(policy)
        case ConstantInterval(interval_ms=ms):
            await clock.sleep_ms(ms)
            return Continue(policy)
        case ExponentialBackoff(generator=g):
            await clock.sleep_ms(g.interval_ms)
            return Continue(ExponentialBackoff(g.next()))
    raise TypeError(f"not a retry policy: {policy!r}")


async def advance(
    started_at_ms: float, policies: Sequence[Policy], error: TransportError, clock: Clock = SYSTEM_CLOCK,
) -> tuple[Policy, ...] | None:
    """Advance every policy concurrently.

    Returns the successor list when all continue, or None when any stops.
    Sleeping policies wait concurrently, so the effective delay is the longest.
    The first stop cancels transitions still sleeping.
    """
    tasks = [asyncio.ensure_future(transition(started_at_ms, p, error, clock)) for p in policies]
    try:
        for fut in asyncio.as_completed(tasks):
            if isinstance(await fut, Stop):
                logger.debug(f"Policy stopped retrying (error: {error})")
                return None
    finally:
        for task in tasks:
            task.cancel()
    return tuple(t.result().policy for t in tasks)  # type: ignore[union-attr]
