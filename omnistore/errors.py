from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Classification for error logging."""

    IO = "io"
    VALIDATION = "validation"
    PROTOCOL = "protocol"


class Rejection(str, Enum):
    """Why a command line or store mutation was not applied."""

    UNKNOWN_COMMAND = "unknown_command"
    EMPTY_KEY = "empty_key"
    EMPTY_VALUE = "empty_value"
    MISSING_DELIMITER = "missing_delimiter"
    DELIMITER_IN_KEY = "delimiter_in_key"
    DELIMITER_IN_VALUE = "delimiter_in_value"
    NOT_FOUND = "not_found"
    NOT_READY = "not_ready"


@dataclass(frozen=True)
class Outcome:
    """Result of applying a command.

    Hosts speaking the text protocol never see this; it exists so callers
    and tests can tell *why* nothing happened. Truthy only when applied.
    """

    applied: bool
    reason: Rejection | None = None
    persisted: bool = False
    value: str | None = None

    def __bool__(self) -> bool:
        return self.applied

    @classmethod
    def ok(cls, *, persisted: bool = False, value: str | None = None) -> Outcome:
        return cls(applied=True, persisted=persisted, value=value)

    @classmethod
    def rejected(cls, reason: Rejection) -> Outcome:
        return cls(applied=False, reason=reason)
