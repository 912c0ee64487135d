"""
Timing helpers for the playback loop.

Responsibilities:
- Measure durations using monotonic time (immune to clock changes)
- Hand the measured duration back to the caller (for the performance monitor)
- Optionally emit the duration as a METRIC_TIMER JSONL event

Design notes:
- Durations use monotonic time for correctness
- Event timestamps (ts_ms) use wall-clock time for human readability
- The per-frame hot path must not log; pass emit=False there
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator

from observability.logger import log_event


@dataclass
class Timing:
    """Mutable holder filled in when a timed() block exits."""
    name: str
    duration_ms: float = 0.0


@contextmanager
def timed(
    name: str,
    *,
    emit: bool = False,
    details: dict[str, Any] | None = None,
    clock_ns: Callable[[], int] = time.monotonic_ns,
) -> Iterator[Timing]:
    """
    Context manager for measuring durations safely.

    Guarantees:
    - Duration is ALWAYS recorded (exceptions do not suppress timing)
    - Metric is emitted at most once

    Usage:
        with timed("decode") as t:
            decode()
        monitor.record_frame_decode(t.duration_ms)
    """
    timing = Timing(name=name)
    start_ns = clock_ns()
    try:
        yield timing
    finally:
        timing.duration_ms = (clock_ns() - start_ns) / 1_000_000
        if emit:
            log_event({
                "ts_ms": int(time.time() * 1000),
                "event_type": "METRIC_TIMER",
                "metric": name,
                "value_ms": timing.duration_ms,
                "details": details or {},
            })
