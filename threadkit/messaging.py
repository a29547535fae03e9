"""Message passing between threads: queues, senders, receivers and dispatchers."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Callable, Optional


class CloseQueue(Exception):
    """A message asking a receiving loop to stop.

    The dispatcher raises it when it arrives, so the loop ends.
    """


class MessageQueue:
    """A blocking FIFO queue of messages of any type."""

    def __init__(self) -> None:
        self._messages: deque[Any] = deque()
        self._cond = threading.Condition(threading.Lock())

    def push(self, message: Any) -> None:
        """Append ``message`` and wake every waiting reader."""
        with self._cond:
            self._messages.append(message)
            self._cond.notify_all()

    def wait_and_pop(self) -> Any:
        """Block until a message is available, then remove and return it."""
        with self._cond:
            self._cond.wait_for(lambda: bool(self._messages))
            return self._messages.popleft()


class Sender:
    """A handle for posting messages to a queue; without a queue it drops them."""

    def __init__(self, queue: Optional[MessageQueue] = None) -> None:
        self._queue = queue

    def send(self, message: Any) -> None:
        """Post ``message`` to the queue, if there is one."""
        if self._queue is not None:
            self._queue.push(message)


class Dispatcher:
    """Waits on a queue and routes the first handled message to its handler.

    Handlers are matched on the exact type of the message. Messages with no
    handler are discarded, except CloseQueue, which is raised.
    """

    def __init__(self, queue: MessageQueue) -> None:
        self._queue = queue
        self._handlers: dict[type, Callable[[Any], Any]] = {}

    def handle(self, message_type: type, func: Callable[[Any], Any]) -> Dispatcher:
        """Register ``func`` for messages of ``message_type``; return self for chaining."""
        self._handlers[message_type] = func
        return self

    def run(self) -> Any:
        """Wait for a handled message, call its handler and return the handler's result.

        Raises CloseQueue if a CloseQueue message arrives first.
        """
        while True:
            message = self._queue.wait_and_pop()
            handler = self._handlers.get(type(message))
            if handler is not None:
                return handler(message)
            if isinstance(message, CloseQueue):
                raise message


class Receiver:
    """Owns a message queue; hands out senders to it and dispatchers over it."""

    def __init__(self) -> None:
        self._queue = MessageQueue()

    def sender(self) -> Sender:
        """Return a sender that posts to this receiver's queue."""
        return Sender(self._queue)

    def wait(self) -> Dispatcher:
        """Return a dispatcher reading from this receiver's queue."""
        return Dispatcher(self._queue)