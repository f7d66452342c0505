"""Failure classifiers: which failures are eligible for retry at all.

A list of classifiers composes with logical OR. An empty list matches
nothing, so attaching no classifier turns retry into a no-op rather than
"retry everything".
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Callable

from taskretry.foundation.errors import BadStatus, NetworkUnreachable, TimedOut, TransportError, is_placeholder


@dataclass(frozen=True, slots=True)
class FailureClassifier:
    """Named predicate over transport errors."""

    predicate: Callable[[TransportError], bool]
    name: str = "custom"

    def __call__(self, err: TransportError) -> bool:
        return self.predicate(err)

    def __repr__(self) -> str:
        return f"FailureClassifier({self.name})"


def classifier(predicate: Callable[[TransportError], bool], *, name: str | None = None) -> FailureClassifier:
    """Wrap an arbitrary predicate as a classifier."""
    return FailureClassifier(predicate, name or getattr(predicate, "__name__", "custom"))


def matches(classifiers: Iterable[FailureClassifier], err: TransportError) -> bool:
    """True iff at least one classifier accepts ``err``.

    The reserved placeholder error is never eligible, whatever the classifiers.
    """
    if is_placeholder(err):
        return False
    return any(c(err) for c in classifiers)


def on_status(code: int) -> FailureClassifier:
    """Match ``BadStatus`` with exactly this status code."""
    return FailureClassifier(lambda err: isinstance(err, BadStatus) and err.code == code, f"status={code}")


on_unauthenticated_status = on_status(401)
on_unauthorized_status = on_status(403)
on_network_error = FailureClassifier(lambda err: isinstance(err, NetworkUnreachable), "network_error")
on_timeout = FailureClassifier(lambda err: isinstance(err, TimedOut), "timeout")
on_all_failures = FailureClassifier(lambda err: True, "all_failures")
