"""Cooperative thread interruption: flags, interruption points and interruptible waits."""

from __future__ import annotations

import threading
from typing import Any, Callable, Optional

_POLL_INTERVAL = 0.05

_local = threading.local()


class ThreadInterrupted(Exception):
    """Raised at an interruption point in a thread whose flag has been set."""


class InterruptFlag:
    """A flag asking a thread to stop, able to wake the condition it waits on."""

    def __init__(self) -> None:
        self._flag = threading.Event()
        self._condition: Optional[threading.Condition] = None
        self._guard = threading.Lock()

    def set(self) -> None:
        """Raise the flag and wake the condition the thread is waiting on, if any."""
        self._flag.set()
        with self._guard:
            condition = self._condition
        if condition is not None:
            with condition:
                condition.notify_all()

    def is_set(self) -> bool:
        """Return whether the flag has been raised."""
        return self._flag.is_set()

    def set_condition(self, condition: threading.Condition) -> None:
        """Record the condition the owning thread is about to wait on."""
        with self._guard:
            self._condition = condition

    def clear_condition(self) -> None:
        """Forget the recorded condition."""
        with self._guard:
            self._condition = None


def _this_thread_flag() -> InterruptFlag:
    flag = getattr(_local, "flag", None)
    if flag is None:
        flag = InterruptFlag()
        _local.flag = flag
    return flag


def interruption_point() -> None:
    """Raise ThreadInterrupted if the current thread has been interrupted."""
    if _this_thread_flag().is_set():
        raise ThreadInterrupted()


def interruptible_wait(
    condition: threading.Condition, predicate: Callable[[], Any]
) -> bool:
    """Wait on ``condition`` until ``predicate`` holds or the thread is interrupted.

    The caller must hold the condition's lock. Raises ThreadInterrupted if the
    current thread's flag is set before or during the wait.
    """
    flag = _this_thread_flag()
    interruption_point()
    flag.set_condition(condition)
    try:
        while True:
            interruption_point()
            if predicate():
                return True
            condition.wait(_POLL_INTERVAL)
    finally:
        flag.clear_condition()


class InterruptibleThread:
    """A started thread that can be asked to stop at its next interruption point.

    An interruption that escapes the target ends the thread quietly.
    """

    def __init__(self, target: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        self._flag = InterruptFlag()
        self._thread = threading.Thread(
            target=self._run, args=(target, args, kwargs), daemon=True
        )
        self._thread.start()

    def _run(self, target: Callable[..., Any], args: tuple, kwargs: dict) -> None:
        _local.flag = self._flag
        try:
            target(*args, **kwargs)
        except ThreadInterrupted:
            pass

    def interrupt(self) -> None:
        """Ask the thread to stop."""
        self._flag.set()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the thread to finish; return whether it has finished."""
        self._thread.join(timeout)
        return not self._thread.is_alive()