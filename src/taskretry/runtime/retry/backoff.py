"""Jittered exponential interval sequence.

Each step draws ``r`` uniformly from [0, 1) and computes::

    lower = current * (1 - RANDOMIZATION_FACTOR)
    upper = current * (1 + RANDOMIZATION_FACTOR)
    next  = min(max_interval, MULTIPLIER * (lower + r * (upper - lower + 1)))

The generator never touches global randomness. Its RNG state is a plain
integer carried in the value, so a sequence is reproducible from its seed and
the state can be inspected or serialized between steps.
"""

from __future__ import annotations

import random
from collections.abc import Iterator
from dataclasses import dataclass, replace

RANDOMIZATION_FACTOR = 0.5
MULTIPLIER = 1.5
DEFAULT_SEED = 0


def draw(state: int) -> tuple[float, int]:
    """Pure RNG step: uniform float in [0, 1) and the successor state."""
    rng = random.Random(state)
    return rng.random(), rng.getrandbits(64)


def jitter(current: float, r: float) -> float:
    """Raw (uncapped) successor of ``current`` for draw ``r``."""
    lower = current * (1 - RANDOMIZATION_FACTOR)
    upper = current * (1 + RANDOMIZATION_FACTOR)
    return MULTIPLIER * (lower + r * (upper - lower + 1))


@dataclass(frozen=True, slots=True)
class BackoffGenerator:
    """Immutable position in a jittered exponential interval sequence.

    Attributes:
        interval_ms: Interval to wait at this position
        max_interval_ms: Hard cap applied to every successor
        rng_state: Integer state of the jitter source
    """

    interval_ms: float
    max_interval_ms: float
    rng_state: int = DEFAULT_SEED

    def next(self) -> BackoffGenerator:
        """Successor position with a freshly drawn, capped interval."""
        r, state = draw(self.rng_state)
        return replace(self, interval_ms=min(self.max_interval_ms, jitter(self.interval_ms, r)), rng_state=state)

    def intervals(self) -> Iterator[float]:
        """Infinite stream of intervals starting at this position."""
        gen = self
        while True:
            yield gen.interval_ms
            gen = gen.next()
