import threading
import time

from threadkit.interrupt import (
    InterruptFlag,
    InterruptibleThread,
    ThreadInterrupted,
    interruptible_wait,
    interruption_point,
)


def test_flag_starts_clear_and_sets():
    flag = InterruptFlag()
    assert flag.is_set() is False
    flag.set()
    assert flag.is_set() is True


def test_set_wakes_recorded_condition():
    flag = InterruptFlag()
    condition = threading.Condition()
    flag.set_condition(condition)
    results = []

    def waiter():
        with condition:
            results.append(condition.wait_for(flag.is_set, timeout=5))

    t = threading.Thread(target=waiter)
    t.start()
    time.sleep(0.05)
    flag.set()
    t.join(5)
    assert results == [True]
    assert flag.is_set() is True


def test_clear_condition_then_set_only_raises_flag():
    flag = InterruptFlag()
    condition = threading.Condition()
    flag.set_condition(condition)
    flag.clear_condition()
    flag.set()
    with condition:
        assert condition.wait_for(flag.is_set, timeout=0.01) is True


def test_interrupt_stops_loop_at_interruption_point():
    events = []

    def loop():
        try:
            while True:
                interruption_point()
                time.sleep(0.001)
        finally:
            events.append("stopped")

    thread = InterruptibleThread(loop)
    time.sleep(0.05)
    assert events == []
    thread.interrupt()
    assert thread.join(5) is True
    assert events == ["stopped"]


def test_interrupt_breaks_interruptible_wait():
    condition = threading.Condition()
    raised = []

    def waiter():
        with condition:
            try:
                interruptible_wait(condition, lambda: False)
            except ThreadInterrupted:
                raised.append(True)
                raise

    thread = InterruptibleThread(waiter)
    time.sleep(0.05)
    thread.interrupt()
    assert thread.join(5) is True
    assert raised == [True]


def test_interruptible_wait_returns_when_predicate_holds():
    condition = threading.Condition()
    ready = []

    def producer():
        time.sleep(0.05)
        with condition:
            ready.append(1)
            condition.notify_all()

    t = threading.Thread(target=producer)
    t.start()
    with condition:
        assert interruptible_wait(condition, lambda: bool(ready)) is True
    t.join(5)
    assert ready == [1]


def test_thread_passes_arguments_and_finishes():
    collected = []
    thread = InterruptibleThread(collected.extend, [1, 2])
    assert thread.join(5) is True
    assert collected == [1, 2]