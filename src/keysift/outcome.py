from dataclasses import dataclass
from enum import Enum
from typing import Optional


class OutcomeKind(str, Enum):
    VALID = "valid"
    INVALID_CHECKSUM = "invalid_checksum"
    INVALID_LENGTH = "invalid_length"
    INVALID_PREFIX = "invalid_prefix"
    INVALID_RANGE = "invalid_range"
    INVALID_CHARACTER_SET = "invalid_character_set"
    INVALID_PLACEHOLDER = "invalid_placeholder"

    def __str__(self):
        return self.value


@dataclass(frozen=True, slots=True)
class ValidationOutcome:
    """Result of a structural check. Invalid input is a normal outcome, not an exception."""

    kind: OutcomeKind
    message: str
    payload: Optional[bytes] = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.VALID

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def valid(cls, message: str, payload: Optional[bytes] = None) -> "ValidationOutcome":
        return cls(OutcomeKind.VALID, message, payload)

    @classmethod
    def invalid(cls, kind: OutcomeKind, message: str) -> "ValidationOutcome":
        return cls(kind, message)
