"""Instance ID allocation for text inputs.

Every text input gets an ID when it is created. Blink messages carry the ID of
the input that armed the timer, so that several inputs sharing one event loop
only react to their own timers.
"""

from __future__ import annotations

import threading
from typing import Protocol


class IdAllocator(Protocol):
    def next_id(self) -> int: ...


class CounterIdAllocator:
    """Monotonic counter, safe to share between threads."""

    def __init__(self, start: int = 0) -> None:
        self._last = start
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            self._last += 1
            return self._last


_default_allocator = CounterIdAllocator()


def default_id_allocator() -> CounterIdAllocator:
    """Return the process-wide allocator used when none is configured."""
    return _default_allocator
