"""
Playback performance monitor.

Responsibilities:
- Track rolling averages of decode, render and total frame time
- Count processed and dropped (decode-skipped) frames
- Produce PerformanceReport snapshots for the frame skipper and for logging

Non-responsibilities:
- No decisions about skipping (see skipper.frame_skipper)
- No logging (the playback loop decides when to log)
"""

from __future__ import annotations

import threading
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable

from constants import (
    DEGRADING_DECODE_MS,
    DEGRADING_DROP_RATE_PCT,
    DEGRADING_TOTAL_MS,
    HEALTHY_MAX_DROP_RATE_PCT,
    HEALTHY_MAX_TOTAL_MS,
    PERF_WINDOW_FRAMES,
)
from performance.rolling import RollingAverage


@dataclass(frozen=True)
class PerformanceReport:
    """
    Aggregated performance metrics over the trailing window.

    avg_decode_ms is the single signal consumed by the frame skipper.
    drop_rate is a percentage (0-100).
    """
    avg_decode_ms: float = 0.0
    avg_render_ms: float = 0.0
    avg_total_ms: float = 0.0
    drop_rate: float = 0.0
    total_frames: int = 0
    dropped_frames: int = 0
    is_healthy: bool = True
    uptime_s: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def is_degrading(self) -> bool:
        return (
            self.drop_rate > DEGRADING_DROP_RATE_PCT
            or self.avg_decode_ms > DEGRADING_DECODE_MS
            or self.avg_total_ms > DEGRADING_TOTAL_MS
        )


class PerformanceMonitor:
    """
    Rolling performance tracker for one playback session.

    window_size: number of frames averaged (120 = 2s at 60fps).
    """

    def __init__(
        self,
        window_size: int = PERF_WINDOW_FRAMES,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._decode = RollingAverage(window_size)
        self._render = RollingAverage(window_size)
        self._total = RollingAverage(window_size)
        self._clock = clock

        self._dropped_frames = 0
        self._total_frames = 0
        self._start = clock()
        self._lock = threading.Lock()

    # -------------------------
    # Recording
    # -------------------------

    def record_frame_decode(self, duration_ms: float) -> None:
        """Record one decoded frame and its decode time."""
        with self._lock:
            self._decode.add(duration_ms)
            self._total_frames += 1

    def record_frame_render(self, duration_ms: float) -> None:
        with self._lock:
            self._render.add(duration_ms)

    def record_total_frame_time(self, duration_ms: float) -> None:
        with self._lock:
            self._total.add(duration_ms)

    def record_frame_dropped(self) -> None:
        """Record a frame whose decode was skipped."""
        with self._lock:
            self._dropped_frames += 1
            self._total_frames += 1

    # -------------------------
    # Reporting
    # -------------------------

    def get_report(self) -> PerformanceReport:
        with self._lock:
            avg_decode = self._decode.average()
            avg_render = self._render.average()
            avg_total = self._total.average()
            total_frames = self._total_frames
            dropped_frames = self._dropped_frames
            uptime_s = int(self._clock() - self._start)

        drop_rate = 0.0
        if total_frames > 0:
            drop_rate = (dropped_frames / total_frames) * 100.0

        is_healthy = drop_rate < HEALTHY_MAX_DROP_RATE_PCT and avg_total < HEALTHY_MAX_TOTAL_MS

        return PerformanceReport(
            avg_decode_ms=avg_decode,
            avg_render_ms=avg_render,
            avg_total_ms=avg_total,
            drop_rate=drop_rate,
            total_frames=total_frames,
            dropped_frames=dropped_frames,
            is_healthy=is_healthy,
            uptime_s=uptime_s,
        )

    def is_performance_degrading(self) -> bool:
        """
        True if any of:
        - drop rate > 5%
        - avg decode > 30ms
        - avg total frame time > 40ms
        """
        return self.get_report().is_degrading()

    def reset(self) -> None:
        with self._lock:
            self._decode.reset()
            self._render.reset()
            self._total.reset()
            self._dropped_frames = 0
            self._total_frames = 0
            self._start = self._clock()
