"""Composable retry strategies.

Builds a policy/classifier configuration declaratively, then runs an
operation under it with either engine:

Example:
    >>> strategy = (
    ...     RetryStrategy()
    ...     .with_max_retries(3)
    ...     .with_exponential_backoff(500, 3000)
    ...     .on(on_status(503), on_timeout)
    ... )
    >>> result = await strategy.execute(fetch_profile)

    >>> # Or decorate the operation itself
    >>> @retrying([max_retries(3), constant_interval(200)], [on_network_error])
    ... async def fetch_profile() -> TaskResult[Profile, TransportError]:
    ...     ...
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Sequence
from functools import wraps
from typing import TYPE_CHECKING, Callable, ParamSpec, TypeVar

from .backoff import DEFAULT_SEED
from .classifier import FailureClassifier
from .engine import Operation, execute_with_retry
from .policy import Clock, Policy, constant_interval, exponential_backoff, max_duration, max_retries
from .resumable import Handler, RetryContext, resumable_with

if TYPE_CHECKING:
    from taskretry.foundation.config import RetrySettings
    from taskretry.foundation.errors import TransportError
    from taskretry.foundation.result import TaskResult

P = ParamSpec("P")
T = TypeVar("T")

logger = logging.getLogger("taskretry.retry.strategy")


class RetryStrategy:
    """Immutable builder of policies and classifiers.

    Every ``with_*``/``on`` call returns a new strategy; the original is left
    untouched, so a base strategy can be shared and specialized per call site.
    """

    __slots__ = ("_policies", "_classifiers", "_clock")

    def __init__(
        self,
        policies: tuple[Policy, ...] = (),
        classifiers: tuple[FailureClassifier, ...] = (),
        clock: Clock | None = None,
    ) -> None:
        self._policies, self._classifiers, self._clock = policies, classifiers, clock

    def with_policy(self, *policies: Policy) -> RetryStrategy:
        return RetryStrategy((*self._policies, *policies), self._classifiers, self._clock)

    def with_max_retries(self, count: int) -> RetryStrategy:
        return self.with_policy(max_retries(count))

    def with_max_duration(self, milliseconds: float) -> RetryStrategy:
        return self.with_policy(max_duration(milliseconds))

    def with_constant_interval(self, milliseconds: float) -> RetryStrategy:
        return self.with_policy(constant_interval(milliseconds))

    def with_exponential_backoff(self, interval: float, max_interval: float, *, seed: int = DEFAULT_SEED) -> RetryStrategy:
        return self.with_policy(exponential_backoff(interval, max_interval, seed=seed))

    def on(self, *classifiers: FailureClassifier) -> RetryStrategy:
        """Add failure classifiers (OR-composed with existing ones)."""
        return RetryStrategy(self._policies, (*self._classifiers, *classifiers), self._clock)

    def with_clock(self, clock: Clock) -> RetryStrategy:
        return RetryStrategy(self._policies, self._classifiers, clock)

    @property
    def policies(self) -> tuple[Policy, ...]:
        return self._policies

    @property
    def classifiers(self) -> tuple[FailureClassifier, ...]:
        return self._classifiers

    async def execute(self, operation: Operation[T]) -> TaskResult[T, TransportError]:
        """Run ``operation`` with the synchronous-style engine."""
        return await execute_with_retry(self._policies, self._classifiers, operation, clock=self._clock)

    async def resumable(self, on_suspend: Handler, operation: Operation[T], *, on_finished: Handler | None = None) -> RetryContext:
        """Start a resumable chain; see ``resumable_with``."""
        return await resumable_with(
            self._policies, self._classifiers, on_suspend, operation, on_finished=on_finished, clock=self._clock,
        )

    def wrap(self, func: Callable[P, Awaitable[TaskResult[T, TransportError]]]) -> Callable[P, Awaitable[TaskResult[T, TransportError]]]:
        """Return a function that runs every call of ``func`` under this strategy."""
        @wraps(func)
        async def wrapped(*args: P.args, **kwargs: P.kwargs) -> TaskResult[T, TransportError]:
            return await self.execute(lambda: func(*args, **kwargs))
        return wrapped

    @classmethod
    def from_settings(cls, settings: RetrySettings | None = None) -> RetryStrategy:
        """Default strategy from configuration (classifiers are left to the caller)."""
        if settings is None:
            from taskretry.foundation.config import get_settings
            settings = get_settings().retry
        strategy = cls().with_max_retries(settings.max_retries)
        if settings.max_duration_ms is not None:
            strategy = strategy.with_max_duration(settings.max_duration_ms)
        strategy = strategy.with_exponential_backoff(settings.interval_ms, settings.max_interval_ms, seed=settings.seed)
        logger.debug(f"Built {strategy!r} from settings")
        return strategy

    def __repr__(self) -> str:
        names = [type(p).__name__ for p in self._policies]
        return f"RetryStrategy([{', '.join(names) or 'empty'}] on {list(self._classifiers)})"


def retrying(
    policies: Sequence[Policy], classifiers: Sequence[FailureClassifier], *, clock: Clock | None = None,
) -> Callable[[Callable[P, Awaitable[TaskResult[T, TransportError]]]], Callable[P, Awaitable[TaskResult[T, TransportError]]]]:
    """Decorator running every call of a coroutine function under a retry strategy."""
    strategy = RetryStrategy(tuple(policies), tuple(classifiers), clock)
    return strategy.wrap
