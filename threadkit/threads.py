"""Context managers that make sure a thread is joined when a block exits."""

from __future__ import annotations

import threading


def _joinable(thread: threading.Thread) -> bool:
    return thread.ident is not None


class ThreadGuard:
    """Joins a thread on leaving the block, if the thread was ever started."""

    def __init__(self, thread: threading.Thread) -> None:
        self.thread = thread

    def __enter__(self) -> ThreadGuard:
        return self

    def __exit__(self, *args: object) -> None:
        if _joinable(self.thread):
            self.thread.join()


class ScopedThread:
    """Takes a started thread and always joins it on leaving the block.

    Raises ValueError at construction if the thread has not been started.
    """

    def __init__(self, thread: threading.Thread) -> None:
        if not _joinable(thread):
            raise ValueError("No thread")
        self.thread = thread

    def __enter__(self) -> ScopedThread:
        return self

    def __exit__(self, *args: object) -> None:
        self.thread.join()