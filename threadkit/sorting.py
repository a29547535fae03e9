"""Quick sort, sequentially and in several concurrent styles."""

from __future__ import annotations

import os
import threading
import time
from concurrent.futures import Future
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

from threadkit.pool import ThreadPool
from threadkit.stack import EmptyStack, ThreadsafeStack

T = TypeVar("T")


def _partition(data: list[T]) -> tuple[T, list[T], list[T]]:
    """Split ``data`` around its first item into lower and not-lower parts."""
    pivot = data[0]
    lower: list[T] = []
    higher: list[T] = []
    for item in data[1:]:
        (lower if item < pivot else higher).append(item)
    return pivot, lower, higher


def _spawn(func: Callable[..., Any], *args: Any) -> Future:
    future: Future = Future()

    def run() -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            future.set_result(func(*args))
        except BaseException as exc:
            future.set_exception(exc)

    threading.Thread(target=run, daemon=True).start()
    return future


def _sequential(data: list[T]) -> list[T]:
    if not data:
        return []
    pivot, lower, higher = _partition(data)
    return _sequential(lower) + [pivot] + _sequential(higher)


def sequential_quick_sort(items: Iterable[T]) -> list[T]:
    """Return the items sorted by quick sort on the calling thread."""
    return _sequential(list(items))


def _async(data: list[T]) -> list[T]:
    if not data:
        return []
    pivot, lower, higher = _partition(data)
    new_lower = _spawn(_async, lower)
    new_higher = _async(higher)
    return new_lower.result() + [pivot] + new_higher


def async_quick_sort(items: Iterable[T]) -> list[T]:
    """Return the items sorted, each lower part sorted on a thread of its own."""
    return _async(list(items))


class _Chunk(Generic[T]):
    __slots__ = ("data", "future")

    def __init__(self, data: list[T]) -> None:
        self.data = data
        self.future: Future = Future()


class _Sorter(Generic[T]):
    """Shares lower-part chunks through a stack that helper threads draw from."""

    def __init__(self) -> None:
        self._chunks: ThreadsafeStack[_Chunk[T]] = ThreadsafeStack()
        self._threads: list[threading.Thread] = []
        self._threads_lock = threading.Lock()
        self._max_threads = max((os.cpu_count() or 1) - 1, 0)
        self._end_of_data = threading.Event()

    def close(self) -> None:
        self._end_of_data.set()
        joined = 0
        while True:
            with self._threads_lock:
                pending = self._threads[joined:]
            if not pending:
                return
            for thread in pending:
                thread.join()
            joined += len(pending)

    def _maybe_start_thread(self) -> None:
        with self._threads_lock:
            if self._end_of_data.is_set() or len(self._threads) >= self._max_threads:
                return
            thread = threading.Thread(target=self._sort_thread, daemon=True)
            self._threads.append(thread)
        thread.start()

    def _sort_chunk(self, chunk: _Chunk[T]) -> None:
        if not chunk.future.set_running_or_notify_cancel():
            return
        try:
            chunk.future.set_result(self.do_sort(chunk.data))
        except BaseException as exc:
            chunk.future.set_exception(exc)

    def try_sort_chunk(self) -> bool:
        try:
            chunk = self._chunks.pop()
        except EmptyStack:
            return False
        self._sort_chunk(chunk)
        return True

    def _sort_thread(self) -> None:
        while not self._end_of_data.is_set():
            self.try_sort_chunk()
            time.sleep(0)

    def do_sort(self, data: list[T]) -> list[T]:
        if not data:
            return []
        pivot, lower, higher = _partition(data)
        chunk: _Chunk[T] = _Chunk(lower)
        self._chunks.push(chunk)
        self._maybe_start_thread()
        new_higher = self.do_sort(higher)
        while not chunk.future.done():
            if not self.try_sort_chunk():
                time.sleep(0)
        return chunk.future.result() + [pivot] + new_higher


def parallel_quick_sort(items: Iterable[T]) -> list[T]:
    """Return the items sorted, with helper threads picking up pending lower parts."""
    data = list(items)
    if not data:
        return []
    sorter: _Sorter[T] = _Sorter()
    try:
        return sorter.do_sort(data)
    finally:
        sorter.close()


def _pool_sort(pool: ThreadPool, data: list[T]) -> list[T]:
    if not data:
        return []
    pivot, lower, higher = _partition(data)
    new_lower = pool.submit(_pool_sort, pool, lower)
    new_higher = _pool_sort(pool, higher)
    while not new_lower.done():
        pool.run_pending_task()
    return new_lower.result() + [pivot] + new_higher


def pool_quick_sort(items: Iterable[T], pool: Optional[ThreadPool] = None) -> list[T]:
    """Return the items sorted, lower parts submitted to ``pool``.

    Without a pool, a pool is created for the sort and shut down afterwards.
    """
    data = list(items)
    if not data:
        return []
    if pool is None:
        with ThreadPool() as own_pool:
            return _pool_sort(own_pool, data)
    return _pool_sort(pool, data)