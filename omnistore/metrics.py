"""In-process store metrics.

Stores and dispatchers may be driven from several threads, so every update
is taken under the metric's own lock.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass


class Counter:
    def __init__(self) -> None:
        self.value = 0
        self._lock = threading.Lock()

    def inc(self, n: int = 1) -> None:
        with self._lock:
            self.value += n


class Gauge:
    def __init__(self) -> None:
        self.value = 0
        self._lock = threading.Lock()

    def set(self, v: int) -> None:
        with self._lock:
            self.value = v


@dataclass
class Span:
    """One timed interval; ``ms`` is filled in when the block exits."""

    ms: float | None = None


class Timer:
    """Latency of the most recently finished interval.

    Each :meth:`time` block measures its own span, so overlapping blocks on
    different threads never read each other's start time.
    """

    def __init__(self) -> None:
        self.last_ms: float | None = None
        self._lock = threading.Lock()

    def record(self, ms: float) -> None:
        with self._lock:
            self.last_ms = ms

    @contextmanager
    def time(self) -> Iterator[Span]:
        span = Span()
        start = time.perf_counter()
        try:
            yield span
        finally:
            span.ms = (time.perf_counter() - start) * 1000
            self.record(span.ms)


commands_total = Counter()
rejected_total = Counter()
writes_total = Counter()
write_failures_total = Counter()
entries = Gauge()
save_ms = Timer()
