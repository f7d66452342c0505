"""Tests for the transport error taxonomy and exception mapping."""

from __future__ import annotations

import socket

import pytest
from pydantic import ValidationError

from taskretry import (
    PLACEHOLDER,
    BadStatus,
    ContextFinishedError,
    CustomError,
    InvalidPolicyError,
    NetworkUnreachable,
    RetryError,
    TimedOut,
    error_from_exception,
    is_placeholder,
)
from taskretry.foundation.errors import dump_error, validate_error


def test_bad_status_positional_and_keyword() -> None:
    assert BadStatus(401) == BadStatus(code=401)
    assert BadStatus(401) != BadStatus(403)
    assert str(BadStatus(503)) == "bad status 503"


def test_bad_status_rejects_impossible_codes() -> None:
    with pytest.raises(ValidationError):
        BadStatus(42)


def test_errors_are_frozen() -> None:
    err = BadStatus(500)
    with pytest.raises(ValidationError):
        err.code = 501  # type: ignore[misc]


def test_validate_dispatches_on_kind() -> None:
    assert validate_error({"kind": "bad_status", "code": 404}) == BadStatus(404)
    assert validate_error({"kind": "timed_out"}) == TimedOut()
    assert isinstance(validate_error({"kind": "network_unreachable"}), NetworkUnreachable)
    with pytest.raises(ValidationError):
        validate_error({"kind": "teapot"})


def test_dump_error_is_json_ready() -> None:
    assert dump_error(CustomError("bad body")) == {"kind": "custom", "message": "bad body", "reserved": False}


def test_placeholder_is_reserved() -> None:
    assert is_placeholder(PLACEHOLDER)
    assert not is_placeholder(CustomError(""))
    assert not is_placeholder(TimedOut())


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (TimeoutError("slow"), TimedOut()),
        (ConnectionRefusedError("refused"), NetworkUnreachable()),
        (socket.gaierror(-2, "Name or service not known"), NetworkUnreachable()),
        (OSError("network is unreachable"), NetworkUnreachable()),
        (RuntimeError("request timeout after 30s"), TimedOut()),
        (RuntimeError("host unreachable"), NetworkUnreachable()),
        (ValueError("bad json"), CustomError("bad json")),
    ],
)
def test_error_from_exception(exc: BaseException, expected: object) -> None:
    assert error_from_exception(exc) == expected


@pytest.mark.parametrize(
    "exc",
    [
        FileNotFoundError(2, "No such file or directory", "/etc/app.toml"),
        PermissionError(13, "Permission denied"),
        IsADirectoryError(21, "Is a directory"),
    ],
)
def test_local_os_errors_are_not_network_failures(exc: OSError) -> None:
    assert error_from_exception(exc) == CustomError(str(exc))


def test_error_from_exception_without_message_uses_type_name() -> None:
    class Weird(Exception):
        pass

    assert error_from_exception(Weird()) == CustomError("Weird")


def test_exception_hierarchy() -> None:
    assert issubclass(ContextFinishedError, RetryError)
    assert issubclass(InvalidPolicyError, ValueError)
    assert "finished" in str(ContextFinishedError())
