"""
utils/timing.py
Elapsed-time measurement for a single search run.
"""
import time
from typing import Optional


class Stopwatch:
    def __init__(self):
        self._start: Optional[float] = None
        self._stop: Optional[float] = None

    def start(self) -> "Stopwatch":
        self._start = time.perf_counter()
        self._stop = None
        return self

    def stop(self) -> float:
        self._stop = time.perf_counter()
        return self.elapsed

    @property
    def elapsed(self) -> float:
        """Seconds since start(); frozen once stop() was called."""
        if self._start is None:
            return 0.0
        end = self._stop if self._stop is not None else time.perf_counter()
        return end - self._start
