# threadkit

Building blocks for concurrent Python programs, built on the standard
`threading` module. There are no third-party dependencies.

## What is inside

- `threadkit.stack`: `ThreadsafeStack` with `push`, `pop`, `empty` and
  `copy`. `pop` returns and removes the top item in one locked step and
  raises `EmptyStack` when the stack is empty.
- `threadkit.queues`: `ThreadsafeQueue` guards a deque with one lock.
  `FineGrainedQueue` is a linked list with separate head and tail locks.
  Both have `push`, `try_pop`, which returns `None` when empty,
  `wait_and_pop(timeout=None)`, which raises `TimeoutError` when the time
  runs out, and `empty`. `ThreadsafeQueue` also has `copy`.
- `threadkit.linked_list`: `ThreadsafeList` has one lock per node and
  walks the list hand over hand. It has `push_front`, `for_each`,
  `find_first_if` and `remove_if`.
- `threadkit.threads`: `ThreadGuard` joins a thread at the end of a
  `with` block if the thread was started. `ScopedThread` raises
  `ValueError` if given a thread that was never started, and always joins
  the thread at the end of the block.
- `threadkit.interrupt`: cooperative interruption.
  `InterruptibleThread(target, *args, **kwargs)` starts at once.
  `interrupt()` raises its `InterruptFlag`. Inside the thread,
  `interruption_point()` and `interruptible_wait(condition, predicate)`
  raise `ThreadInterrupted` once the flag is set. When that exception
  escapes the target, the thread ends quietly. `join(timeout=None)`
  returns whether the thread has finished.
- `threadkit.pool`: `ThreadPool(thread_count=None)` is a work-stealing
  pool. It starts one worker per CPU by default. `submit(func, *args)`
  returns a `concurrent.futures.Future`. Tasks submitted from a worker go
  to that worker's own `WorkStealingQueue`. `run_pending_task()` runs one
  queued task on the calling thread. `shutdown()`, which also runs when a
  `with` block ends, stops the workers and cancels every task that was
  never started. Submitting after shutdown raises `RuntimeError`.
  `pool_accumulate(items, init)` sums blocks of 25 items on a pool.
- `threadkit.sorting`: quick sorts that return a new list.
  `sequential_quick_sort` runs on the calling thread. `async_quick_sort`
  gives each lower part a thread of its own. `parallel_quick_sort` shares
  lower parts with helper threads through a `ThreadsafeStack`.
  `pool_quick_sort(items, pool=None)` submits lower parts to a
  `ThreadPool`, and creates one for the sort if none is given.
- `threadkit.messaging`: `MessageQueue`, `Sender`, `Receiver` and
  `Dispatcher` for actor-style message passing. A `Dispatcher` matches
  handlers on the exact type of the message and discards messages it has
  no handler for. It raises `CloseQueue` when a `CloseQueue` message
  arrives.
- A cash machine built on messaging: `threadkit.atm.Atm`,
  `threadkit.bank.BankMachine`, `threadkit.interface.InterfaceMachine`,
  the message types in `threadkit.messages`, and `threadkit.cli.run_atm`,
  which wires them together.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

```python
from threadkit.stack import ThreadsafeStack, EmptyStack

stack = ThreadsafeStack()
stack.push(5)
assert stack.pop() == 5
try:
    stack.pop()
except EmptyStack:
    pass
```

```python
from threadkit.pool import ThreadPool, pool_accumulate

with ThreadPool() as pool:
    future = pool.submit(sum, [1, 2, 3])
    assert future.result() == 6

assert pool_accumulate([10] * 10, 5) == 105
```

```python
from threadkit.sorting import pool_quick_sort

assert pool_quick_sort([5, 3, 8, 1]) == [1, 3, 5, 8]
```

```python
from threadkit.messaging import Receiver

receiver = Receiver()
receiver.sender().send("hello")
result = receiver.wait().handle(str, str.upper).run()
assert result == "HELLO"
```

## The cash machine demo

```
threadkit-atm
```

The demo reads single characters from standard input until it reads `q`
or reaches the end of the input:

| key     | action             |
|---------|--------------------|
| `i`     | insert a card      |
| `0`-`9` | enter a PIN digit  |
| `b`     | show the balance   |
| `w`     | withdraw 50        |
| `c`     | cancel             |
| `q`     | quit               |

It ignores every other character. The demo bank accepts the PIN `1937`
and starts with a balance of 199. The bank keeps that balance in memory
only, so nothing is saved between runs.

## What is not included

The package has no general parallel algorithms beyond `pool_accumulate`
and the quick sorts. It has no lock-ordering or reader/writer locks, no
barriers, and no concurrent hash map. Use the standard library's
`threading` and `concurrent.futures` for those.