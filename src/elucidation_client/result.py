"""Outcome of a request to the Elucidation server."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RecorderStatus(str, Enum):
    """Possible outcomes of a recording attempt."""
    SUCCESS = "success"
    ERROR = "error"
    # Typically because recording is disabled
    SKIPPED = "skipped"


@dataclass(frozen=True)
class ElucidationResult:
    """Status of a recording attempt, with at most one of a skip message,
    an error message or an exception."""
    status: RecorderStatus
    skip_message: str | None = None
    error_message: str | None = None
    exception: Exception | None = None

    @classmethod
    def ok(cls) -> ElucidationResult:
        return cls(RecorderStatus.SUCCESS)

    @classmethod
    def from_skip_message(cls, skip_message: str) -> ElucidationResult:
        return cls(RecorderStatus.SKIPPED, skip_message=skip_message)

    @classmethod
    def from_error_message(cls, error_message: str) -> ElucidationResult:
        return cls(RecorderStatus.ERROR, error_message=error_message)

    @classmethod
    def from_exception(cls, exception: Exception) -> ElucidationResult:
        return cls(RecorderStatus.ERROR, exception=exception)

    @property
    def is_success(self) -> bool:
        return self.status is RecorderStatus.SUCCESS
