"""Shared fixtures: virtual time and scripted operations."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence

import pytest

from taskretry import Clock, TaskResult, TransportError
from taskretry.foundation.config import clear_settings_cache


class VirtualClock:
    """Millisecond clock that only moves when something sleeps or ticks.

    Concurrent sleeps overlap: each sleeper targets ``now + ms`` as seen when
    it started, and time jumps to the latest target.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def now_ms(self) -> float:
        return self.now

    async def sleep_ms(self, ms: float) -> None:
        target = self.now + ms
        self.sleeps.append(ms)
        await asyncio.sleep(0)
        self.now = max(self.now, target)

    def tick(self, ms: float) -> None:
        self.now += ms

    @property
    def clock(self) -> Clock:
        return Clock(self.now_ms, self.sleep_ms)


class ScriptedOperation:
    """Operation replaying a fixed list of results; the last one repeats."""

    def __init__(self, results: Sequence[TaskResult[str, TransportError]], clock: VirtualClock | None = None, cost_ms: float = 0.0) -> None:
        self.results = list(results)
        self.attempts = 0
        self._clock, self._cost = clock, cost_ms

    async def __call__(self) -> TaskResult[str, TransportError]:
        self.attempts += 1
        if self._clock is not None:
            self._clock.tick(self._cost)
        return self.results[min(self.attempts, len(self.results)) - 1]


@pytest.fixture
def vclock() -> VirtualClock:
    return VirtualClock()


@pytest.fixture
def make_clock() -> Callable[[], VirtualClock]:
    """Factory for independent virtual clocks within one test."""
    return VirtualClock


@pytest.fixture
def script() -> Callable[..., ScriptedOperation]:
    """Factory: script(result, result, ..., clock=None, cost_ms=0.0)."""
    def make(*results: TaskResult[str, TransportError], clock: VirtualClock | None = None, cost_ms: float = 0.0) -> ScriptedOperation:
        return ScriptedOperation(results, clock, cost_ms)
    return make


@pytest.fixture(autouse=True)
def clean_settings() -> object:
    """Reset cached settings before and after each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()
