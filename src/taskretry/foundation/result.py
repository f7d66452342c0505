"""Four-state result of an asynchronous operation.

A discriminated union of NotRequested / Pending / Succeeded(data) / Failed(error):
- Functor: map, map_error
- Extraction: unwrap, unwrap_error, with_default
- Exhaustive pattern matching via match() or structural ``match`` statements

The retry engine only acts on ``Failed``; the other three states pass through
untouched.

Performance notes:
- Uses __slots__ for minimal memory footprint
- Stateless variants are singletons
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Callable, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterator

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")


class State(IntEnum):
    """Lifecycle state of a TaskResult."""
    NOT_REQUESTED, PENDING, SUCCEEDED, FAILED = 0, 1, 2, 3


_NAMES = {State.NOT_REQUESTED: "NotRequested", State.PENDING: "Pending",
          State.SUCCEEDED: "Succeeded", State.FAILED: "Failed"}


class TaskResult(Generic[T, E]):
    """Outcome of a remote operation in one of four states.

    Examples:
        >>> Succeeded(21).map(lambda x: x * 2).unwrap()
        42
        >>> Failed("boom").map(lambda x: x * 2).unwrap_error()
        'boom'
        >>> Pending().with_default(0)
        0
    """

    __slots__ = ("_state", "_value")
    __match_args__ = ("state", "value")

    def __init__(self, state: State, value: T | E | None = None) -> None:
        self._state = state
        self._value = value

    @property
    def state(self) -> State:
        return self._state

    @property
    def value(self) -> T | E | None:
        """Raw payload: data when succeeded, error when failed, else None."""
        return self._value

    # ─── Type Checking ───────────────────────────────────────────────

    def is_not_requested(self) -> bool:
        return self._state is State.NOT_REQUESTED

    def is_pending(self) -> bool:
        return self._state is State.PENDING

    def is_succeeded(self) -> bool:
        return self._state is State.SUCCEEDED

    def is_failed(self) -> bool:
        return self._state is State.FAILED

    # ─── Value Extraction ──────────────────────────────────────────────

    def unwrap(self) -> T:
        """Extract Succeeded data. Raises RuntimeError otherwise."""
        if self._state is State.SUCCEEDED:
            return self._value  # type: ignore[return-value]
        raise RuntimeError(f"unwrap() on {self!r}")

    def unwrap_error(self) -> E:
        """Extract Failed error. Raises RuntimeError otherwise."""
        if self._state is State.FAILED:
            return self._value  # type: ignore[return-value]
        raise RuntimeError(f"unwrap_error() on {self!r}")

    def with_default(self, default: T) -> T:
        """Succeeded data, or default for every other state."""
        return self._value if self._state is State.SUCCEEDED else default  # type: ignore[return-value]

    def error(self) -> E | None:
        """Failed error or None."""
        return self._value if self._state is State.FAILED else None  # type: ignore[return-value]

    # ─── Functor Operations ────────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> TaskResult[U, E]:
        """Apply f to Succeeded data; other states pass through."""
        return TaskResult(State.SUCCEEDED, f(self._value)) if self._state is State.SUCCEEDED else self  # type: ignore[arg-type,return-value]

    def map_error(self, f: Callable[[E], F]) -> TaskResult[T, F]:
        """Apply f to Failed error; other states pass through."""
        return TaskResult(State.FAILED, f(self._value)) if self._state is State.FAILED else self  # type: ignore[arg-type,return-value]

    # ─── Pattern Matching ────────────────────────────────────────────────

    def match(
        self, *,
        not_requested: Callable[[], U],
        pending: Callable[[], U],
        succeeded: Callable[[T], U],
        failed: Callable[[E], U],
    ) -> U:
        """Exhaustive pattern match over all four states."""
        match self._state:
            case State.NOT_REQUESTED: return not_requested()
            case State.PENDING: return pending()
            case State.SUCCEEDED: return succeeded(self._value)  # type: ignore[arg-type]
            case _: return failed(self._value)  # type: ignore[arg-type]

    # ─── Dunder Methods ──────────────────────────────────────────────────

    def __repr__(self) -> str:
        name = _NAMES[self._state]
        return f"{name}({self._value!r})" if self._state >= State.SUCCEEDED else f"{name}()"

    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaskResult):
            return NotImplemented
        return self._state is other._state and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._state, self._value))

    def __iter__(self) -> Iterator[T]:
        """Iterate: yields data if Succeeded, nothing otherwise."""
        if self._state is State.SUCCEEDED:
            yield self._value  # type: ignore[misc]


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════

_NOT_REQUESTED: TaskResult[object, object] = TaskResult(State.NOT_REQUESTED)
_PENDING: TaskResult[object, object] = TaskResult(State.PENDING)


def NotRequested() -> TaskResult[T, E]:  # noqa: N802
    """Operation has not been issued yet."""
    return _NOT_REQUESTED  # type: ignore[return-value]


def Pending() -> TaskResult[T, E]:  # noqa: N802
    """Operation is in flight."""
    return _PENDING  # type: ignore[return-value]


def Succeeded(data: T) -> TaskResult[T, E]:  # noqa: N802
    """Operation completed with data."""
    return TaskResult(State.SUCCEEDED, data)


def Failed(error: E) -> TaskResult[T, E]:  # noqa: N802
    """Operation completed with an error."""
    return TaskResult(State.FAILED, error)
