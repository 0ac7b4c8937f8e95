"""Outcome of a single pipeline step."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class StepStatus(StrEnum):
    """How a pipeline step ended."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    BLOCKED = "blocked"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


@dataclass(frozen=True)
class StepResult(Generic[T]):
    """Found(value) | NotFound | Blocked | TimedOut | Failed.

    Steps return one of these instead of raising, so the pipeline can
    decide per status whether to continue, fall back, or abort the domain.
    """

    status: StepStatus
    value: T | None = None
    reason: str = ""

    @classmethod
    def found(cls, value: T) -> StepResult[T]:
        return cls(StepStatus.FOUND, value)

    @classmethod
    def not_found(cls, reason: str = "") -> StepResult[T]:
        return cls(StepStatus.NOT_FOUND, reason=reason)

    @classmethod
    def blocked(cls, reason: str = "") -> StepResult[T]:
        return cls(StepStatus.BLOCKED, reason=reason)

    @classmethod
    def timed_out(cls, reason: str = "") -> StepResult[T]:
        return cls(StepStatus.TIMED_OUT, reason=reason)

    @classmethod
    def failed(cls, reason: str = "") -> StepResult[T]:
        return cls(StepStatus.FAILED, reason=reason)

    @property
    def ok(self) -> bool:
        """True only for FOUND."""
        return self.status is StepStatus.FOUND

    def unwrap(self) -> T:
        """Return the value of a FOUND result."""
        if self.status is not StepStatus.FOUND or self.value is None:
            msg = f"cannot unwrap {self.status} result: {self.reason}"
            raise ValueError(msg)
        return self.value
