"""Thread-safe FIFO queues: one with a single lock, one with split head/tail locks."""

from __future__ import annotations

import threading
from collections import deque
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ThreadsafeQueue(Generic[T]):
    """A FIFO queue guarded by one mutex with a condition for waiting pops."""

    def __init__(self) -> None:
        self._items: deque[T] = deque()
        self._lock = threading.Lock()
        self._not_empty = threading.Condition(self._lock)

    def push(self, value: T) -> None:
        """Append ``value`` and wake one waiting consumer."""
        with self._not_empty:
            self._items.append(value)
            self._not_empty.notify()

    def wait_and_pop(self, timeout: Optional[float] = None) -> T:
        """Block until an item is available and return it.

        Raises TimeoutError if ``timeout`` seconds pass with the queue empty.
        """
        with self._not_empty:
            if not self._not_empty.wait_for(lambda: bool(self._items), timeout):
                raise TimeoutError("no item arrived before the timeout")
            return self._items.popleft()

    def try_pop(self) -> Optional[T]:
        """Return the front item, or None if the queue is empty."""
        with self._lock:
            if not self._items:
                return None
            return self._items.popleft()

    def empty(self) -> bool:
        """Return True if the queue holds no items."""
        with self._lock:
            return not self._items

    def copy(self) -> ThreadsafeQueue[T]:
        """Return an independent queue with the same items, taken under lock."""
        clone: ThreadsafeQueue[T] = ThreadsafeQueue()
        with self._lock:
            clone._items = deque(self._items)
        return clone

    def __copy__(self) -> ThreadsafeQueue[T]:
        return self.copy()


class _Node:
    __slots__ = ("data", "next")

    def __init__(self) -> None:
        self.data = None
        self.next: Optional[_Node] = None


class FineGrainedQueue(Generic[T]):
    """A linked-list FIFO queue with separate locks for head and tail.

    A dummy node always sits at the tail, so producers touch only the tail
    and consumers only the head; the two sides meet only when comparing the
    head with the current tail.
    """

    def __init__(self) -> None:
        self._head = _Node()
        self._tail = self._head
        self._head_lock = threading.Lock()
        self._tail_lock = threading.Lock()
        self._data_cond = threading.Condition(self._head_lock)

    def _get_tail(self) -> _Node:
        with self._tail_lock:
            return self._tail

    def _has_data(self) -> bool:
        return self._head is not self._get_tail()

    def _pop_head(self) -> _Node:
        old_head = self._head
        self._head = old_head.next
        return old_head

    def push(self, value: T) -> None:
        """Append ``value`` and wake one waiting consumer."""
        new_tail = _Node()
        with self._tail_lock:
            self._tail.data = value
            self._tail.next = new_tail
            self._tail = new_tail
        with self._data_cond:
            self._data_cond.notify()

    def try_pop(self) -> Optional[T]:
        """Return the front item, or None if the queue is empty."""
        with self._head_lock:
            if not self._has_data():
                return None
            return self._pop_head().data

    def wait_and_pop(self, timeout: Optional[float] = None) -> T:
        """Block until an item is available and return it.

        Raises TimeoutError if ``timeout`` seconds pass with the queue empty.
        """
        with self._data_cond:
            if not self._data_cond.wait_for(self._has_data, timeout):
                raise TimeoutError("no item arrived before the timeout")
            return self._pop_head().data

    def empty(self) -> bool:
        """Return True if the queue holds no items."""
        with self._head_lock:
            return not self._has_data()