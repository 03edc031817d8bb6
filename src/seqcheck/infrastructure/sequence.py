"""Sequence Source: process-wide call ordering.

Every intercepted call gets a number from one shared generator, so calls
on different targets are totally ordered by capture time.
Thread-safe for free-threaded Python (PEP 703).
"""

from __future__ import annotations

import threading


class SequenceNumberGenerator:
    """Strictly increasing, never reused integers.

    Thread Safety:
      - _lock protects _next; each next() is atomic
    """

    __slots__ = ("_lock", "_next")

    def __init__(self, start: int = 0) -> None:
        """Initialize generator.

        Args:
            start: First number issued (must be >= 0).
        """
        if start < 0:
            raise ValueError(f"start must be >= 0, got {start}")
        self._lock = threading.Lock()
        self._next = start

    def next(self) -> int:
        """Issue the next sequence number."""
        with self._lock:
            value = self._next
            self._next += 1
            return value

    @property
    def next_value(self) -> int:
        """Number the next call will receive (not consumed)."""
        with self._lock:
            return self._next


# Shared by all substitutes unless one is injected
GLOBAL_SEQUENCE = SequenceNumberGenerator()
