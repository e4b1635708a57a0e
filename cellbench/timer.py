"""
Elapsed-time measurement for benchmarks.

Two interchangeable clock backends:
- ProcessCPUClock: CPU time consumed by this process (clock_gettime with
  CLOCK_PROCESS_CPUTIME_ID). Not affected by time spent blocked or preempted.
- WallClock: monotonic wall time at microsecond resolution, used where the
  process CPU-time clock is not exposed.

The backend is chosen once at import time (DEFAULT_CLOCK).
"""

import time
from typing import Optional


class ClockError(RuntimeError):
    """The elapsed-time clock could not be read."""


class ProcessCPUClock:
    """Process CPU-time clock, sub-microsecond resolution."""

    name = "process-cpu"

    def __init__(self):
        self.clock_id = time.CLOCK_PROCESS_CPUTIME_ID
        try:
            self.resolution_ns = int(time.clock_getres(self.clock_id) * 1e9) or 1
        except OSError as e:
            raise ClockError(f"Cannot query clock resolution: {e}") from e

    def now_ns(self) -> int:
        try:
            return time.clock_gettime_ns(self.clock_id)
        except OSError as e:
            raise ClockError(f"clock_gettime failed: {e}") from e


class WallClock:
    """Monotonic wall clock truncated to whole microseconds."""

    name = "wall"
    resolution_ns = 1000

    def now_ns(self) -> int:
        try:
            ns = time.monotonic_ns()
        except OSError as e:
            raise ClockError(f"monotonic clock failed: {e}") from e
        return (ns // 1000) * 1000


def select_clock():
    """Return the most precise clock backend this platform exposes."""
    if hasattr(time, "clock_gettime_ns") and hasattr(
        time, "CLOCK_PROCESS_CPUTIME_ID"
    ):
        return ProcessCPUClock()
    return WallClock()


DEFAULT_CLOCK = select_clock()


class Stopwatch:
    """
    Nanosecond stopwatch.

    Holds the epoch captured by the most recent reset(); elapsed() is relative
    to it. Construction performs an initial reset.
    """

    def __init__(self, clock=None):
        self.clock = clock if clock is not None else DEFAULT_CLOCK
        self._epoch: Optional[int] = None
        self.reset()

    def reset(self):
        """Capture the current instant as the new epoch."""
        self._epoch = self.clock.now_ns()

    def elapsed(self) -> int:
        """Nanoseconds since the last reset()."""
        delta = self.clock.now_ns() - self._epoch
        return delta if delta > 0 else 0

    def __repr__(self) -> str:
        return f"Stopwatch(clock={self.clock.name})"
