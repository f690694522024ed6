"""Result types returned by response validation.

A validation call yields an ``Outcome`` holding either a value or a
``Failure``. Failures carry one flat kind (``"validation"``) and a rendered
message; the structured cause and per-element errors ride along for callers
that want more than the message.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

VALIDATION_KIND = "validation"


class FailureCause(str, Enum):
    """Why a response was rejected."""
    BLANK = "blank"
    SYNTAX = "syntax"
    ENVELOPE = "envelope"
    ARRAY_SHAPE = "array_shape"
    ELEMENT_ERRORS = "element_errors"
    EMPTY = "empty"


@dataclass(frozen=True)
class ElementError:
    """Decode problem of a single element of the actions array."""
    index: int
    reason: str

    def __str__(self) -> str:
        return f"Action[{self.index}]: {self.reason}"


@dataclass(frozen=True)
class Failure:
    """Aggregated description of everything wrong with one response."""
    kind: str
    message: str
    cause: FailureCause
    element_errors: tuple[ElementError, ...] = ()

    def __post_init__(self):
        if self.cause == FailureCause.ELEMENT_ERRORS and not self.element_errors:
            raise ValueError("element_errors failure requires at least one element error")

    @classmethod
    def of(cls, cause: FailureCause, message: str) -> "Failure":
        return cls(kind=VALIDATION_KIND, message=message, cause=cause)

    @classmethod
    def from_element_errors(cls, errors: list[ElementError]) -> "Failure":
        """Join element errors in index order into one failure."""
        ordered = tuple(sorted(errors, key=lambda e: e.index))
        return cls(
            kind=VALIDATION_KIND,
            message="; ".join(str(e) for e in ordered),
            cause=FailureCause.ELEMENT_ERRORS,
            element_errors=ordered,
        )

    def __str__(self) -> str:
        return f"[{self.kind}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "cause": self.cause.value,
            "message": self.message,
            "elementErrors": [
                {"index": e.index, "reason": e.reason} for e in self.element_errors
            ],
        }


class OutcomeError(RuntimeError):
    """Raised when unwrapping a failed outcome."""

    def __init__(self, failure: Failure):
        super().__init__(failure.message)
        self.failure = failure


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a successful value or a failure, never both."""
    value: T | None = None
    failure: Failure | None = field(default=None)

    def __post_init__(self):
        if (self.value is None) == (self.failure is None):
            raise ValueError("Outcome requires exactly one of value or failure")

    @classmethod
    def ok(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, failure: Failure) -> "Outcome[T]":
        return cls(failure=failure)

    @property
    def is_ok(self) -> bool:
        return self.failure is None

    @property
    def is_failure(self) -> bool:
        return self.failure is not None

    @property
    def message(self) -> str | None:
        """Failure message, or None on success."""
        return self.failure.message if self.failure else None

    def unwrap(self) -> T:
        """Return the value or raise OutcomeError with the failure."""
        if self.failure is not None:
            raise OutcomeError(self.failure)
        return self.value

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        if self.failure is not None:
            return {"ok": False, "failure": self.failure.to_dict()}
        value = self.value
        if isinstance(value, BaseModel):
            value = value.model_dump(mode="json")
        return {"ok": True, "value": value}
