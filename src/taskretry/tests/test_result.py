"""Tests for the four-state TaskResult container.

Validates:
- Functor laws on the Succeeded branch
- Pass-through of non-succeeded states
- Extraction and exhaustive matching
"""

from __future__ import annotations

from typing import Callable

import pytest

from taskretry import Failed, NotRequested, Pending, State, Succeeded, TaskResult


# ═════════════════════════════════════════════════════════════════════════════
# Property Tests - Functor Laws
# ═════════════════════════════════════════════════════════════════════════════


def test_functor_identity() -> None:
    """Functor law: fmap id = id"""
    for result in (Succeeded(42), Failed("fail"), Pending(), NotRequested()):
        assert result.map(lambda x: x) == result


def test_functor_composition() -> None:
    """Functor law: fmap (f . g) = fmap f . fmap g"""
    f: Callable[[int], int] = lambda x: x + 1
    g: Callable[[int], int] = lambda x: x * 2

    result: TaskResult[int, str] = Succeeded(5)
    assert result.map(lambda x: f(g(x))) == result.map(g).map(f)


# ═════════════════════════════════════════════════════════════════════════════
# Operational Tests
# ═════════════════════════════════════════════════════════════════════════════


def test_succeeded_accessors() -> None:
    result: TaskResult[int, str] = Succeeded(42)

    assert result.is_succeeded()
    assert not result.is_failed()
    assert result.state is State.SUCCEEDED
    assert result.unwrap() == 42
    assert result.error() is None
    assert list(result) == [42]


def test_failed_accessors() -> None:
    result: TaskResult[int, str] = Failed("boom")

    assert result.is_failed()
    assert result.unwrap_error() == "boom"
    assert result.error() == "boom"
    assert result.with_default(0) == 0
    assert list(result) == []
    with pytest.raises(RuntimeError, match="unwrap"):
        result.unwrap()


def test_stateless_variants_are_singletons() -> None:
    assert Pending() is Pending()
    assert NotRequested() is NotRequested()
    assert Pending() != NotRequested()
    assert Pending().is_pending() and NotRequested().is_not_requested()


def test_map_error_only_touches_failed() -> None:
    assert Failed("x").map_error(str.upper) == Failed("X")
    assert Succeeded("x").map_error(str.upper) == Succeeded("x")
    assert Pending().map_error(str.upper) is Pending()


def test_unwrap_error_on_non_failed_raises() -> None:
    with pytest.raises(RuntimeError, match="Pending"):
        Pending().unwrap_error()


def test_exhaustive_match() -> None:
    handlers = dict(
        not_requested=lambda: "idle",
        pending=lambda: "loading",
        succeeded=lambda d: f"ok:{d}",
        failed=lambda e: f"err:{e}",
    )
    assert NotRequested().match(**handlers) == "idle"
    assert Pending().match(**handlers) == "loading"
    assert Succeeded(1).match(**handlers) == "ok:1"
    assert Failed("x").match(**handlers) == "err:x"


def test_structural_pattern_matching() -> None:
    match Failed("timeout"):
        case TaskResult(State.FAILED, err):
            assert err == "timeout"
        case _:
            pytest.fail("expected Failed")


def test_repr_and_hash() -> None:
    assert repr(Succeeded(1)) == "Succeeded(1)"
    assert repr(Pending()) == "Pending()"
    assert len({Succeeded(1), Succeeded(1), Failed(1)}) == 2
