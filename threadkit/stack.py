"""A lock-protected LIFO stack whose pop both reads and removes the top item."""

from __future__ import annotations

import threading
from typing import Generic, TypeVar

T = TypeVar("T")


class EmptyStack(Exception):
    """Raised when popping from a stack that holds no items."""

    def __init__(self, message: str = "empty stack") -> None:
        super().__init__(message)


class ThreadsafeStack(Generic[T]):
    """A stack guarded by a single mutex.

    ``pop`` returns and removes the top item in one locked step, so no other
    thread can slip in between checking the top and removing it.
    """

    def __init__(self) -> None:
        self._items: list[T] = []
        self._lock = threading.Lock()

    def push(self, value: T) -> None:
        """Put ``value`` on top of the stack."""
        with self._lock:
            self._items.append(value)

    def pop(self) -> T:
        """Remove and return the top item; raise EmptyStack if there is none."""
        with self._lock:
            if not self._items:
                raise EmptyStack()
            return self._items.pop()

    def empty(self) -> bool:
        """Return True if the stack holds no items."""
        with self._lock:
            return not self._items

    def copy(self) -> ThreadsafeStack[T]:
        """Return an independent stack with the same items, taken under lock."""
        clone: ThreadsafeStack[T] = ThreadsafeStack()
        with self._lock:
            clone._items = list(self._items)
        return clone

    def __copy__(self) -> ThreadsafeStack[T]:
        return self.copy()