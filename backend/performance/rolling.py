"""
Fixed-window rolling average of durations (milliseconds).

Backed by a preallocated numpy ring buffer. The mean is taken over the
buffer on every read, so a non-finite sample only affects the average
while it is inside the window.
"""

from __future__ import annotations

import threading

import numpy as np
import numpy.typing as npt


class RollingAverage:
    """
    Thread-safe rolling mean over the last `window_size` samples.

    average() is 0.0 until the first sample arrives.
    """

    def __init__(self, window_size: int) -> None:
        if window_size <= 0:
            raise ValueError("window_size must be > 0")

        self._window_size = window_size
        self._samples: npt.NDArray[np.float64] = np.zeros(window_size, dtype=np.float64)
        self._index = 0
        self._filled = False
        self._lock = threading.Lock()

    def add(self, value_ms: float) -> None:
        """Record a new sample, overwriting the oldest once the window is full."""
        with self._lock:
            self._samples[self._index] = value_ms

            self._index += 1
            if self._index >= self._window_size:
                self._index = 0
                self._filled = True

    def average(self) -> float:
        with self._lock:
            count = self._count_locked()
            if count == 0:
                return 0.0
            return float(np.mean(self._samples[:count]))

    def count(self) -> int:
        with self._lock:
            return self._count_locked()

    def values(self) -> npt.NDArray[np.float64]:
        """Copy of the tracked samples, oldest first."""
        with self._lock:
            if not self._filled:
                return self._samples[: self._index].copy()
            return np.roll(self._samples, -self._index).copy()

    def reset(self) -> None:
        with self._lock:
            self._samples = np.zeros(self._window_size, dtype=np.float64)
            self._index = 0
            self._filled = False

    def _count_locked(self) -> int:
        return self._window_size if self._filled else self._index
