"""
Timing utilities for throughput benchmarking.

Provides the clock abstraction and a small timer used by the calibration
loop. The clock is injectable so tests can drive time deterministically.
"""

import time
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

# A clock returns seconds as a float from an arbitrary monotonic origin.
Clock = Callable[[], float]

default_clock: Clock = time.perf_counter


class Timer:
    """Simple timer for manual timing control."""

    def __init__(self, name: str = "timer", clock: Optional[Clock] = None):
        self.name = name
        self.clock = clock or default_clock
        self.start_time: float = 0.0
        self.end_time: float = 0.0
        self._running = False

    def start(self) -> "Timer":
        """Start the timer."""
        self.start_time = self.clock()
        self._running = True
        return self

    def stop(self) -> "Timer":
        """Stop the timer."""
        self.end_time = self.clock()
        self._running = False
        return self

    @property
    def running(self) -> bool:
        return self._running

    @property
    def elapsed_seconds(self) -> float:
        """Elapsed time in seconds; reads the clock while running."""
        end = self.end_time if not self._running else self.clock()
        return end - self.start_time

    @property
    def elapsed_ms(self) -> float:
        """Elapsed time in milliseconds."""
        return self.elapsed_seconds * 1000


@contextmanager
def timed(name: str = "operation", clock: Optional[Clock] = None) -> Iterator[Timer]:
    """Context manager for timing synchronous operations.

    Usage:
        with timed("calibration") as timer:
            # do work
        print(f"Elapsed: {timer.elapsed_ms}ms")
    """
    timer = Timer(name, clock).start()
    try:
        yield timer
    finally:
        timer.stop()


def format_duration(ms: float) -> str:
    """Format a millisecond duration for log lines."""
    if ms < 1:
        return f"{ms * 1000:.1f}us"
    if ms < 1000:
        return f"{ms:.1f}ms"
    return f"{ms / 1000:.2f}s"
