"""Run clock: nanoseconds since the start of the run."""

import time


class Clock:
    """Monotonic nanosecond clock anchored at construction time."""

    def __init__(self):
        self._start = time.perf_counter_ns()
        self._last = -1
        # Wall-clock anchor, written to the trace header
        self.epoch_us = time.time_ns() // 1000

    def _elapsed(self) -> int:
        return time.perf_counter_ns() - self._start

    def now(self) -> int:
        """Elapsed nanoseconds; every reading is strictly past the previous one."""
        reading = max(self._elapsed(), self._last + 1)
        self._last = reading
        return reading
