"""Transport error taxonomy consumed by failure classifiers.

Errors are frozen Pydantic models discriminated by ``kind`` so a failure can be
validated, serialized and pattern-matched like any other value. The engine
never raises them; they travel inside ``Failed``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, TypeAlias, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

_FROZEN = ConfigDict(frozen=True, extra="forbid", revalidate_instances="never")


class BadStatus(BaseModel):
    """Response arrived with a non-success status code."""

    model_config = ConfigDict(
        frozen=True, extra="forbid", revalidate_instances="never",
        json_schema_extra={"title": "Bad Status", "examples": [{"kind": "bad_status", "code": 503}]},
    )

    kind: Literal["bad_status"] = "bad_status"
    code: Annotated[int, Field(ge=100, le=599)]

    def __init__(self, code: int | None = None, /, **data: Any) -> None:
        super().__init__(**({"code": code} if code is not None else {}), **data)

    def __str__(self) -> str:
        return f"bad status {self.code}"


class NetworkUnreachable(BaseModel):
    """Request never reached the remote end."""

    model_config = _FROZEN

    kind: Literal["network_unreachable"] = "network_unreachable"

    def __str__(self) -> str:
        return "network unreachable"


class TimedOut(BaseModel):
    """Request did not complete in time."""

    model_config = _FROZEN

    kind: Literal["timed_out"] = "timed_out"

    def __str__(self) -> str:
        return "timed out"


class CustomError(BaseModel):
    """Free-form failure.

    ``reserved`` marks the internal placeholder used when an infallible
    operation is coerced into the fallible result shape. Classifiers never
    see a reserved error.
    """

    model_config = _FROZEN

    kind: Literal["custom"] = "custom"
    message: str = ""
    reserved: bool = Field(default=False, repr=False)

    def __init__(self, message: str | None = None, /, **data: Any) -> None:
        super().__init__(**({"message": message} if message is not None else {}), **data)

    def __str__(self) -> str:
        return self.message or "custom error"


TransportError: TypeAlias = Annotated[
    Union[BadStatus, NetworkUnreachable, TimedOut, CustomError],
    Field(discriminator="kind"),
]

# Module-level so the schema is built once
_TransportErrorAdapter: TypeAdapter[TransportError] = TypeAdapter(TransportError)

PLACEHOLDER = CustomError(reserved=True)


def is_placeholder(err: object) -> bool:
    """Whether ``err`` is the reserved placeholder (or any reserved error)."""
    return isinstance(err, CustomError) and err.reserved


def validate_error(data: object) -> TransportError:
    """Validate a dict (or model) as one of the transport error variants."""
    return _TransportErrorAdapter.validate_python(data)


def dump_error(err: TransportError) -> dict[str, Any]:
    """Serialize an error to a JSON-compatible dict."""
    return _TransportErrorAdapter.dump_python(err, mode="json")
