from dataclasses import dataclass
from datetime import timedelta
from enum import Enum


class State(str, Enum):
    READY = "ready"
    WORKING = "working"
    FINISHED_SUCCESS = "finished_success"
    FINISHED_FAIL = "finished_fail"

    @property
    def finished(self) -> bool:
        return self in (State.FINISHED_SUCCESS, State.FINISHED_FAIL)


@dataclass(frozen=True, slots=True)
class ProgressState:
    """Immutable snapshot of a search run, handed to the presentation layer."""

    version: int
    state: State
    message: str
    percent: float
    is_progress_visible: bool
    found_any_result: bool
    elapsed: timedelta
    total: int
