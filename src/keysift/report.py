"""
Progress and outcome report for one search run.

Many worker threads write to a Report while a single presentation consumer
observes it through ProgressState snapshots (see subscribe()).
"""
from datetime import timedelta
from typing import Optional
import threading
import time

import structlog

from keysift.broadcast_latest import BroadcastLatest, Subscriber
from keysift.dispatcher import Dispatcher, IDispatcher
from keysift.progress_state import ProgressState, State

log = structlog.get_logger()


class Stopwatch:
    def __init__(self) -> None:
        self._started_at: Optional[float] = None
        self._elapsed = 0.0

    @property
    def is_running(self) -> bool:
        return self._started_at is not None

    @property
    def elapsed(self) -> timedelta:
        seconds = self._elapsed
        if self._started_at is not None:
            seconds += time.perf_counter() - self._started_at
        return timedelta(seconds=seconds)

    def restart(self) -> None:
        self._elapsed = 0.0
        self._started_at = time.perf_counter()

    def stop(self) -> None:
        if self._started_at is not None:
            self._elapsed += time.perf_counter() - self._started_at
            self._started_at = None


def get_kps(total_keys: int, total_seconds: float) -> str:
    """Keys per second message; under one second the rate is shown as infinite."""
    if total_seconds < 1:
        return "k/s= ∞"
    return f"k/s= {total_keys // int(total_seconds):,}"


class Report:
    def __init__(self, dispatcher: Optional[IDispatcher] = None) -> None:
        self._owns_dispatcher = dispatcher is None
        self.ui_thread: IDispatcher = dispatcher if dispatcher is not None else Dispatcher()
        self.timer = Stopwatch()

        self._state = State.READY
        self._message = ""
        self._is_progress_visible = False
        self._progress = 0.0
        self._step = 0.0
        self._found_any_result = False
        self._total = 0

        self._progress_lock = threading.Lock()
        self._notify_lock = threading.Lock()
        self._version = 0
        self._channel: BroadcastLatest[ProgressState] = BroadcastLatest()
        self._publish()

    # ---- Observation ----
    @property
    def state(self) -> State:
        return self._state

    @property
    def message(self) -> str:
        return self._message

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def is_progress_visible(self) -> bool:
        return self._is_progress_visible

    @property
    def total(self) -> int:
        return self._total

    @property
    def found_any_result(self) -> bool:
        return self._found_any_result

    @found_any_result.setter
    def found_any_result(self, value: bool) -> None:
        self._found_any_result = value
        self._publish()

    def snapshot(self) -> ProgressState:
        return ProgressState(
            version=self._version,
            state=self._state,
            message=self._message,
            percent=self._progress,
            is_progress_visible=self._is_progress_visible,
            found_any_result=self._found_any_result,
            elapsed=self.timer.elapsed,
            total=self._total,
        )

    def subscribe(self) -> Subscriber[ProgressState]:
        return self._channel.subscribe()

    def __enter__(self) -> "Report":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        """
        Let pending messages land, then end every subscription.
        The report stays usable afterwards; safe messages are applied on the caller.
        """
        self.ui_thread.flush()
        if self._owns_dispatcher:
            self.ui_thread.close()
        self._publish()
        self._channel.close()

    def _publish(self) -> None:
        with self._notify_lock:
            self._version += 1
            self._channel.publish(self.snapshot())

    # ---- Run lifecycle ----
    def init(self) -> None:
        self.ui_thread.flush()
        self._state = State.WORKING
        self._found_any_result = False
        self._message = ""
        with self._progress_lock:
            self._progress = 0.0
            self._step = 0.0
        self._is_progress_visible = False
        self._total = 0
        self.timer.restart()
        log.debug("report.init")
        self._publish()

    def set_total(self, value: int) -> None:
        self._total = value
        self.add_message_safe(f"Total number of permutations to check: {value:,}")

    def set_total_pow(self, value: int, exponent: int) -> None:
        self.set_total(value ** exponent)

    def set_progress_step(self, split_size: int) -> None:
        """Declare that the work is split into split_size equal shares."""
        if split_size < 1:
            raise ValueError(f"split_size must be at least 1, got {split_size}")
        self.add_message_safe("Running in parallel.")
        self._step = 100 / split_size
        self.ui_thread.invoke_async(self._show_progress)

    def _show_progress(self) -> None:
        self._is_progress_visible = True
        self._publish()

    def increment_progress(self) -> None:
        with self._progress_lock:
            self._progress += self._step
        self._publish()

    def finalize(self, success: Optional[bool] = None) -> bool:
        if success is not None:
            self._state = State.FINISHED_SUCCESS if success else State.FINISHED_FAIL
            self._publish()
            return success

        if self.timer.is_running:
            self.timer.stop()
            elapsed = self.timer.elapsed
            self.add_message_safe(f"Elapsed time: {elapsed}")

            if self._total != 0:
                if self._progress == 0 or self._progress >= 99:
                    total_keys = self._total
                else:
                    total_keys = self._total * int(self._progress) // 100
                self.add_message_safe(get_kps(total_keys, elapsed.total_seconds()))

        self._state = State.FINISHED_SUCCESS if self._found_any_result else State.FINISHED_FAIL
        with self._progress_lock:
            self._progress = 100.0
        log.info("report.finalize", state=self._state.value, elapsed=str(self.timer.elapsed))
        self._publish()
        return self._found_any_result

    def fail(self, msg: str) -> bool:
        self.add_message(msg)
        self._state = State.FINISHED_FAIL
        self._publish()
        return False

    def pass_(self, msg: str) -> bool:
        self.add_message(msg)
        self._state = State.FINISHED_SUCCESS
        self._publish()
        return True

    # ---- Messages ----
    def _append(self, msg: str) -> None:
        self._message = msg if not self._message else f"{self._message}\n{msg}"
        self._publish()

    def add_message(self, msg: str) -> None:
        """Thread UNSAFE way of quickly adding a message to the report."""
        self._append(msg)

    def add_message_safe(self, msg: str) -> None:
        """Thread safe way of adding a message; the append runs on the dispatcher thread."""
        self.ui_thread.invoke_async(lambda: self._append(msg))

    def set_key_per_sec(self, total_keys: int, total_seconds: float) -> None:
        self.add_message(get_kps(total_keys, total_seconds))

    def set_key_per_sec_safe(self, total_keys: int, total_seconds: float) -> None:
        self.add_message_safe(get_kps(total_keys, total_seconds))
