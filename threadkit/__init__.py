"""Thread-safe stacks, queues and lists, thread helpers, a work-stealing pool, quick sorts and message passing."""

__version__ = "0.1.0"