"""
Playback loop execution shell.

Responsibilities:
- Ask the frame skipper, once per render, whether to decode
- Run the (external) decode step only when told to
- Always run the (external) render step
- Feed decode / render / total frame times into the performance monitor
- Reset the skipper on media switches
- Periodically log performance and memory

Non-responsibilities:
- No decoding or drawing of its own (decode / render are injected)
- No skip policy (lives in skipper.frame_skipper)
"""

from __future__ import annotations

import time
from typing import Callable

from constants import MEMORY_LOG_INTERVAL_S, PERF_LOG_INTERVAL_S, TARGET_RENDER_FPS
from observability.logger import log_event
from observability.metrics import timed
from performance.memory import log_memory_snapshot
from performance.monitor import PerformanceMonitor, PerformanceReport
from skipper.decision import SkipDecision
from skipper.frame_skipper import FrameSkipper


HEALTH_OK = "OK"
HEALTH_DEGRADED = "DEGRADED"
HEALTH_WARNING = "WARNING"


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class PlaybackLoop:
    """
    Fixed-rate render loop driver for one playback session.

    The skipper and monitor may be shared with a telemetry reader
    (see server.app); both are internally synchronized.
    """

    def __init__(
        self,
        *,
        decode: Callable[[], None],
        render: Callable[[], None],
        skipper: FrameSkipper | None = None,
        monitor: PerformanceMonitor | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        memory_logger: Callable[[], None] = log_memory_snapshot,
    ) -> None:
        self._decode = decode
        self._render = render
        self.skipper = skipper or FrameSkipper()
        self.monitor = monitor or PerformanceMonitor()
        self._clock = clock
        self._sleep = sleep
        self._memory_logger = memory_logger

        now = clock()
        self._last_perf_log = now
        self._last_memory_log = now

    # ------------------------------------------------------------------
    # Per-frame
    # ------------------------------------------------------------------

    def step(self) -> SkipDecision:
        """
        Run one render-loop iteration.

        Exceptions raised by decode/render propagate after their timing
        has been recorded.
        """
        with timed("frame_total") as total:
            decision = self.skipper.decide(self.monitor.get_report())

            if decision.should_decode:
                try:
                    with timed("decode") as t:
                        self._decode()
                finally:
                    self.monitor.record_frame_decode(t.duration_ms)
            else:
                # Renderer re-presents the last decoded frame
                self.monitor.record_frame_dropped()

            try:
                with timed("render") as r:
                    self._render()
            finally:
                self.monitor.record_frame_render(r.duration_ms)

        self.monitor.record_total_frame_time(total.duration_ms)
        self._maybe_log()
        return decision

    def run(self, iterations: int, *, target_fps: float = TARGET_RENDER_FPS) -> None:
        """Drive step() at a fixed cadence, sleeping out each frame budget."""
        if target_fps <= 0:
            raise ValueError("target_fps must be > 0")

        budget_s = 1.0 / target_fps
        for _ in range(iterations):
            start = self._clock()
            self.step()
            remaining = budget_s - (self._clock() - start)
            if remaining > 0:
                self._sleep(remaining)

    # ------------------------------------------------------------------
    # Session control
    # ------------------------------------------------------------------

    def switch_media(self, *, media_id: str | None = None) -> None:
        """Fresh performance profile for new media."""
        self.skipper.reset()
        log_event({
            "ts_ms": _now_ms(),
            "event_type": "MEDIA_SWITCHED",
            "media_id": media_id,
        })

    def reset_performance_metrics(self) -> None:
        self.monitor.reset()
        log_event({
            "ts_ms": _now_ms(),
            "event_type": "PERFORMANCE_METRICS_RESET",
        })

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    def health_status(self, report: PerformanceReport | None = None) -> str:
        """Health label derived from a single report snapshot."""
        if report is None:
            report = self.monitor.get_report()
        if report.is_degrading():
            return HEALTH_WARNING
        if not report.is_healthy:
            return HEALTH_DEGRADED
        return HEALTH_OK

    def _maybe_log(self) -> None:
        now = self._clock()

        if now - self._last_perf_log >= PERF_LOG_INTERVAL_S:
            report = self.monitor.get_report()
            mode = self.skipper.current_mode()
            log_event({
                "ts_ms": _now_ms(),
                "event_type": "PERFORMANCE",
                "health": self.health_status(report),
                "mode": mode.value,
                "mode_label": mode.label,
                **report.to_dict(),
            })
            self._last_perf_log = now

        if now - self._last_memory_log >= MEMORY_LOG_INTERVAL_S:
            self._memory_logger()
            self._last_memory_log = now
