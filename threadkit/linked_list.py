"""A singly linked list with a lock per node, traversed hand over hand."""

from __future__ import annotations

import threading
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class _Node(Generic[T]):
    __slots__ = ("lock", "data", "next")

    def __init__(self, data: Optional[T] = None) -> None:
        self.lock = threading.Lock()
        self.data = data
        self.next: Optional[_Node[T]] = None


class ThreadsafeList(Generic[T]):
    """A list where each node has its own lock.

    Traversals hold at most two adjacent node locks at a time, so several
    threads can work on different parts of the list at once.
    """

    def __init__(self) -> None:
        self._head: _Node[T] = _Node()

    def push_front(self, value: T) -> None:
        """Insert ``value`` at the front of the list."""
        node: _Node[T] = _Node(value)
        with self._head.lock:
            node.next = self._head.next
            self._head.next = node

    def for_each(self, func: Callable[[T], object]) -> None:
        """Call ``func`` on every value from front to back."""
        current = self._head
        current.lock.acquire()
        try:
            while (following := current.next) is not None:
                following.lock.acquire()
                current.lock.release()
                current = following
                func(current.data)
        finally:
            current.lock.release()

    def find_first_if(self, predicate: Callable[[T], bool]) -> Optional[T]:
        """Return the first value satisfying ``predicate``, or None."""
        current = self._head
        current.lock.acquire()
        try:
            while (following := current.next) is not None:
                following.lock.acquire()
                current.lock.release()
                current = following
                if predicate(current.data):
                    return current.data
            return None
        finally:
            current.lock.release()

    def remove_if(self, predicate: Callable[[T], bool]) -> None:
        """Remove every value satisfying ``predicate``."""
        current = self._head
        current.lock.acquire()
        try:
            while (following := current.next) is not None:
                following.lock.acquire()
                try:
                    matched = predicate(following.data)
                except BaseException:
                    following.lock.release()
                    raise
                if matched:
                    current.next = following.next
                    following.lock.release()
                else:
                    current.lock.release()
                    current = following
        finally:
            current.lock.release()