import threading

import pytest

from threadkit.messaging import CloseQueue, Dispatcher, MessageQueue, Receiver, Sender


def test_queue_is_fifo():
    queue = MessageQueue()
    for message in ("a", "b", "c"):
        queue.push(message)
    assert [queue.wait_and_pop() for _ in range(3)] == ["a", "b", "c"]


def test_sender_pushes_to_queue():
    queue = MessageQueue()
    Sender(queue).send(("hello", 1))
    assert queue.wait_and_pop() == ("hello", 1)


def test_wait_and_pop_blocks_until_push():
    queue = MessageQueue()
    result = []

    def reader():
        popped = queue.wait_and_pop()
        result.append(popped)

    thread = threading.Thread(target=reader)
    thread.start()
    Sender(queue).send(42)
    thread.join(5)
    assert result == [42]
    queue.push("after")
    assert queue.wait_and_pop() == "after"


def test_dispatcher_calls_handler_and_returns_result():
    receiver = Receiver()
    receiver.sender().send(5)
    outcome = receiver.wait().handle(int, lambda n: n * 2).run()
    assert outcome == 10


def test_unhandled_messages_are_discarded():
    receiver = Receiver()
    seen = []
    receiver.sender().send("ignored")
    receiver.sender().send(7)
    receiver.wait().handle(int, seen.append).run()
    assert seen == [7]


def test_chained_handlers_route_by_type():
    receiver = Receiver()
    ints, strs = [], []
    receiver.sender().send("x")
    receiver.wait().handle(int, ints.append).handle(str, strs.append).run()
    assert (ints, strs) == ([], ["x"])


def test_handle_returns_same_dispatcher():
    dispatcher = Dispatcher(MessageQueue())
    assert dispatcher.handle(int, print) is dispatcher


def test_run_stops_after_one_handled_message():
    receiver = Receiver()
    seen = []
    receiver.sender().send(1)
    receiver.sender().send(2)
    receiver.wait().handle(int, seen.append).run()
    assert seen == [1]
    receiver.wait().handle(int, seen.append).run()
    assert seen == [1, 2]


def test_close_queue_is_raised():
    receiver = Receiver()
    receiver.sender().send(CloseQueue())
    with pytest.raises(CloseQueue):
        receiver.wait().handle(int, print).run()


def test_close_queue_raised_with_no_handlers():
    receiver = Receiver()
    receiver.sender().send("skip")
    receiver.sender().send(CloseQueue())
    with pytest.raises(CloseQueue):
        receiver.wait().run()


def test_handler_exception_propagates():
    receiver = Receiver()
    receiver.sender().send(3)

    def fail(message):
        raise ValueError(message)

    with pytest.raises(ValueError):
        receiver.wait().handle(int, fail).run()


def test_dispatch_across_threads():
    receiver = Receiver()
    seen = []
    worker = threading.Thread(
        target=lambda: receiver.wait().handle(str, seen.append).run()
    )
    worker.start()
    receiver.sender().send("ping")
    worker.join(5)
    assert seen == ["ping"]