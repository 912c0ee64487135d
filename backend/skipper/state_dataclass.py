"""
Authoritative frame skipper state and configuration containers.

Rules:
- These dataclasses are pure data models.
- SkipperState holds ALL control state the transition reducer needs.
- SkipperConfig holds thresholds and hysteresis lengths (rarely changed).
- Both are frozen: writers replace them wholesale, readers never see a
  half-updated object.
"""
from __future__ import annotations

from dataclasses import dataclass

from constants import (
    SKIP_ENTER_SKIP2_AFTER,
    SKIP_ENTER_SKIP3_AFTER,
    SKIP_EXIT_TO_NORMAL_AFTER,
    SKIP_EXIT_TO_SKIP2_AFTER,
    SKIP_GOOD_THRESHOLD_MS,
    SKIP_SLOW_THRESHOLD_MS,
)
from skipper.enums.mode import Mode


# =============================================================================
# Control State
# =============================================================================

@dataclass(frozen=True)
class SkipperState:
    """
    Immutable snapshot of frame skipper control state.

    Invariant:
    - At most one of consecutive_slow / consecutive_good is non-zero.
    - frame_counter counts decide() calls since the last reset and is
      only ever used as a cadence modulus, never for timing.
    """

    mode: Mode = Mode.NORMAL
    frame_counter: int = 0
    consecutive_slow: int = 0
    consecutive_good: int = 0


# =============================================================================
# Configuration
# =============================================================================

@dataclass(frozen=True)
class SkipperConfig:
    """
    Thresholds and hysteresis lengths.

    slow_threshold_ms > good_threshold_ms is assumed but not enforced.
    """

    slow_threshold_ms: float = SKIP_SLOW_THRESHOLD_MS
    good_threshold_ms: float = SKIP_GOOD_THRESHOLD_MS

    # Consecutive slow samples before escalating
    enter_skip2_after: int = SKIP_ENTER_SKIP2_AFTER
    enter_skip3_after: int = SKIP_ENTER_SKIP3_AFTER

    # Consecutive good samples before de-escalating
    exit_to_normal_after: int = SKIP_EXIT_TO_NORMAL_AFTER
    exit_to_skip2_after: int = SKIP_EXIT_TO_SKIP2_AFTER
