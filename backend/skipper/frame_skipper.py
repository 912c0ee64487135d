"""
Adaptive decode-rate scheduler ("frame skipper").

Responsibilities:
- Own the authoritative SkipperState and SkipperConfig for one playback session
- Serialize all mutations behind a single lock
- Call the pure transition reducer once per decide()
- Derive the go/skip decision from the post-transition mode
- Log mode changes, resets and threshold updates

Non-responsibilities:
- No decoding, no rendering, no timing
- No knowledge of video formats or display surfaces
"""

from __future__ import annotations

import threading
import time
from dataclasses import replace
from typing import Any, Protocol

from observability.logger import log_event
from skipper.decision import SkipDecision, SkipperStats, derive_decision
from skipper.enums.mode import Mode
from skipper.state_dataclass import SkipperConfig, SkipperState
from skipper.transitions import ModeTransition, reduce


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class DecodeLatencySource(Protocol):
    """Anything carrying a trailing-window average decode latency."""

    @property
    def avg_decode_ms(self) -> float: ...


class FrameSkipper:
    """
    Feedback-controlled decode/skip scheduler for a fixed-rate render loop.

    Concurrency:
    - decide / reset / configure take the lock exclusively.
    - current_mode / stats take the same lock for O(1) reads. State is a
      frozen dataclass swapped wholesale, so a reader always observes a
      single completed write.
    - Logging is performed after the lock is released.

    Lifecycle:
    - One instance per playback session, created in NORMAL mode.
    - reset() on session boundaries (e.g. switching media).
    """

    def __init__(self, config: SkipperConfig | None = None) -> None:
        self._config: SkipperConfig = config or SkipperConfig()
        self._state: SkipperState = SkipperState()
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Hot path
    # ------------------------------------------------------------------

    def decide(self, report: DecodeLatencySource) -> SkipDecision:
        """
        Decide whether the expensive decode step should run this render.

        Call once per render-loop iteration, before decoding.
        """
        with self._lock:
            new_state, transition = reduce(self._state, report.avg_decode_ms, self._config)
            self._state = new_state
            decision = derive_decision(new_state.mode, new_state.frame_counter)

        if transition is not None:
            self._log_transition(transition, new_state, report.avg_decode_ms)

        return decision

    # ------------------------------------------------------------------
    # Session control
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Return to NORMAL with zeroed counters. Idempotent."""
        with self._lock:
            old_mode = self._state.mode
            self._state = SkipperState()

        if old_mode is not Mode.NORMAL:
            log_event({
                "ts_ms": _now_ms(),
                "event_type": "FRAME_SKIPPER_RESET",
                "from_mode": old_mode.value,
                "mode": Mode.NORMAL.value,
            })

    def configure(self, slow_ms: float, good_ms: float) -> None:
        """
        Overwrite the slow/good thresholds.

        No ordering validation. Takes effect on the next decide().
        """
        with self._lock:
            self._config = replace(
                self._config,
                slow_threshold_ms=slow_ms,
                good_threshold_ms=good_ms,
            )

        log_event({
            "ts_ms": _now_ms(),
            "event_type": "FRAME_SKIPPER_THRESHOLDS_UPDATED",
            "slow_threshold_ms": slow_ms,
            "good_threshold_ms": good_ms,
        })

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    def current_mode(self) -> Mode:
        with self._lock:
            return self._state.mode

    def stats(self) -> SkipperStats:
        """Consistent snapshot of the full control state."""
        with self._lock:
            state = self._state
        return SkipperStats(
            mode=state.mode,
            frame_counter=state.frame_counter,
            consecutive_slow=state.consecutive_slow,
            consecutive_good=state.consecutive_good,
        )

    def config(self) -> SkipperConfig:
        with self._lock:
            return self._config

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _log_transition(
        transition: ModeTransition,
        state: SkipperState,
        avg_decode_ms: float,
    ) -> None:
        payload: dict[str, Any] = {
            "ts_ms": _now_ms(),
            "event_type": "FRAME_SKIPPER_MODE_CHANGED",
            "decision": transition.decision,
            "from_mode": transition.from_mode.value,
            "to_mode": transition.to_mode.value,
            "to_label": transition.to_mode.label,
            "frame_counter": state.frame_counter,
            "avg_decode_ms": avg_decode_ms,
        }
        log_event(payload)
