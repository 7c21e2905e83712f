from typing import Optional

from pydantic import BaseModel

from keysift.outcome import OutcomeKind, ValidationOutcome
from keysift.progress_state import State


class CheckResponse(BaseModel):
    input: str
    valid: bool
    kind: OutcomeKind
    message: str
    payload_hex: Optional[str] = None

    @classmethod
    def from_outcome(cls, text: str, outcome: ValidationOutcome) -> "CheckResponse":
        return cls(
            input=text,
            valid=outcome.ok,
            kind=outcome.kind,
            message=outcome.message,
            payload_hex=outcome.payload.hex() if outcome.payload is not None else None,
        )


class ScanResponse(BaseModel):
    found_any_result: bool
    state: State
    percent: float
    message: str
