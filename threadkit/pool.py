"""A work-stealing thread pool and an accumulate built on it."""

from __future__ import annotations

import os
import threading
import time
from collections import deque
from concurrent.futures import Future
from functools import reduce
from operator import add
from typing import Any, Callable, Generic, Optional, Sequence, TypeVar

from threadkit.queues import ThreadsafeQueue

T = TypeVar("T")

_BLOCK_SIZE = 25
_IDLE_PAUSE = 0.0005


class WorkStealingQueue(Generic[T]):
    """A deque of tasks: its owner works at the front, thieves take from the back."""

    def __init__(self) -> None:
        self._tasks: deque[T] = deque()
        self._lock = threading.Lock()

    def push(self, task: T) -> None:
        """Put ``task`` at the owner's end of the queue."""
        with self._lock:
            self._tasks.appendleft(task)

    def empty(self) -> bool:
        """Return True if the queue holds no tasks."""
        with self._lock:
            return not self._tasks

    def try_pop(self) -> Optional[T]:
        """Take the most recently pushed task, or return None if there is none."""
        with self._lock:
            if not self._tasks:
                return None
            return self._tasks.popleft()

    def try_steal(self) -> Optional[T]:
        """Take the oldest task, or return None if there is none."""
        with self._lock:
            if not self._tasks:
                return None
            return self._tasks.pop()


class _Task:
    __slots__ = ("future", "func", "args")

    def __init__(self, future: Future, func: Callable[..., Any], args: tuple) -> None:
        self.future = future
        self.func = func
        self.args = args

    def __call__(self) -> None:
        if not self.future.set_running_or_notify_cancel():
            return
        try:
            self.future.set_result(self.func(*self.args))
        except BaseException as exc:
            self.future.set_exception(exc)


class ThreadPool:
    """A fixed set of worker threads sharing a global queue and per-worker queues.

    Tasks submitted from a worker go to that worker's own queue; idle workers
    take from their own queue, then the global queue, then steal from others.
    """

    def __init__(self, thread_count: Optional[int] = None) -> None:
        if thread_count is None:
            thread_count = os.cpu_count() or 1
        if thread_count < 0:
            raise ValueError("thread count must not be negative")
        self._done = threading.Event()
        self._state_lock = threading.Lock()
        self._pool_queue: ThreadsafeQueue[_Task] = ThreadsafeQueue()
        self._queues: list[WorkStealingQueue[_Task]] = [
            WorkStealingQueue() for _ in range(thread_count)
        ]
        self._local = threading.local()
        self._threads: list[threading.Thread] = []
        try:
            for index in range(thread_count):
                thread = threading.Thread(
                    target=self._worker_thread, args=(index,), daemon=True
                )
                thread.start()
                self._threads.append(thread)
        except BaseException:
            self._done.set()
            for thread in self._threads:
                thread.join()
            raise

    def _worker_thread(self, index: int) -> None:
        self._local.index = index
        self._local.queue = self._queues[index]
        while not self._done.is_set():
            if not self._run_one():
                time.sleep(_IDLE_PAUSE)

    def _pop_from_others(self) -> Optional[_Task]:
        count = len(self._queues)
        my_index = getattr(self._local, "index", 0)
        for offset in range(count):
            task = self._queues[(my_index + offset + 1) % count].try_steal()
            if task is not None:
                return task
        return None

    def _pop_task(self) -> Optional[_Task]:
        local: Optional[WorkStealingQueue[_Task]] = getattr(self._local, "queue", None)
        if local is not None:
            task = local.try_pop()
            if task is not None:
                return task
        task = self._pool_queue.try_pop()
        if task is not None:
            return task
        return self._pop_from_others()

    def _run_one(self) -> bool:
        task = self._pop_task()
        if task is None:
            return False
        task()
        return True

    def submit(self, func: Callable[..., T], *args: Any) -> Future:
        """Queue ``func(*args)`` and return a future for its result.

        Raises RuntimeError once the pool has been shut down.
        """
        future: Future = Future()
        task = _Task(future, func, args)
        with self._state_lock:
            if self._done.is_set():
                raise RuntimeError("cannot submit to a pool that has been shut down")
            local: Optional[WorkStealingQueue[_Task]] = getattr(
                self._local, "queue", None
            )
            if local is not None:
                local.push(task)
            else:
                self._pool_queue.push(task)
        return future

    def run_pending_task(self) -> bool:
        """Run one queued task on the calling thread; return whether one ran."""
        if self._run_one():
            return True
        time.sleep(0)
        return False

    def shutdown(self) -> None:
        """Stop the workers, wait for them, and cancel every task never started."""
        with self._state_lock:
            self._done.set()
        current = threading.current_thread()
        for thread in self._threads:
            if thread is not current:
                thread.join()
        while (task := self._pool_queue.try_pop()) is not None:
            task.future.cancel()
        for queue in self._queues:
            while (task := queue.try_pop()) is not None:
                task.future.cancel()

    def __enter__(self) -> ThreadPool:
        return self

    def __exit__(self, *args: object) -> None:
        self.shutdown()


def _accumulate_block(items: Sequence[T], start: int, stop: int, zero: Callable[[], T]) -> T:
    return reduce(add, items[start:stop], zero())


def pool_accumulate(items: Sequence[T], init: T) -> T:
    """Sum ``items`` onto ``init`` by handing fixed-size blocks to a thread pool.

    Each block is summed from the zero value of ``type(init)``; the block sums
    are added to ``init`` in order.
    """
    length = len(items)
    if not length:
        return init
    zero = type(init)
    starts = range(0, length, _BLOCK_SIZE)
    with ThreadPool() as pool:
        futures = [
            pool.submit(_accumulate_block, items, start, start + _BLOCK_SIZE, zero)
            for start in starts[:-1]
        ]
        last_result = _accumulate_block(items, starts[-1], length, zero)
        result = init
        for future in futures:
            result = result + future.result()
    return result + last_result