from collections import deque
from typing import Callable, Deque, Optional, Protocol
import threading

import structlog

log = structlog.get_logger()

Action = Callable[[], None]


class IDispatcher(Protocol):
    def invoke_async(self, action: Action) -> None: ...
    def flush(self, timeout: Optional[float] = None) -> bool: ...
    def close(self, timeout: Optional[float] = None) -> None: ...


class Dispatcher:
    """
    Runs submitted actions one at a time on a single consumer thread, in FIFO order.
    invoke_async() never blocks the caller. Once closed, late actions run on the
    caller instead, still one at a time.
    """
    def __init__(self, name: str = "keysift-dispatcher") -> None:
        self._cv = threading.Condition()
        self._actions: Deque[Action] = deque()
        self._pending = 0
        self._closed = False
        self._run_lock = threading.RLock()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()

    def invoke_async(self, action: Action) -> None:
        with self._cv:
            if not self._closed:
                self._actions.append(action)
                self._pending += 1
                self._cv.notify_all()
                return
        if threading.current_thread() is not self._thread:
            self.flush()
        self._execute(action)

    def flush(self, timeout: Optional[float] = None) -> bool:
        """Block until every action submitted so far has run. Returns False on timeout."""
        with self._cv:
            return self._cv.wait_for(lambda: self._pending == 0, timeout)

    def close(self, timeout: Optional[float] = None) -> None:
        """Stop queueing actions, run what is queued, then stop the consumer thread."""
        with self._cv:
            self._closed = True
            self._cv.notify_all()
        self._thread.join(timeout)

    def _run(self) -> None:
        while True:
            with self._cv:
                self._cv.wait_for(lambda: self._actions or self._closed)
                if not self._actions:
                    return
                action = self._actions.popleft()
            try:
                self._execute(action)
            finally:
                with self._cv:
                    self._pending -= 1
                    self._cv.notify_all()

    def _execute(self, action: Action) -> None:
        with self._run_lock:
            try:
                action()
            except Exception:
                log.exception("dispatcher.action_failed")


class InlineDispatcher:
    """Runs each action right away on the calling thread, one at a time."""
    def __init__(self) -> None:
        self._lock = threading.Lock()

    def invoke_async(self, action: Action) -> None:
        with self._lock:
            action()

    def flush(self, timeout: Optional[float] = None) -> bool:
        return True

    def close(self, timeout: Optional[float] = None) -> None:
        pass
