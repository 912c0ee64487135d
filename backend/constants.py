"""
CONSTANTS-AS-POLICY
-------------------
Single source of truth for all tunable defaults of the decode-rate scheduler.

Rules:
- If changing a value changes runtime behavior, it belongs here.
- No magic numbers elsewhere in the codebase.
- Other modules MUST import from this file.
"""

from __future__ import annotations

from typing import Final

# =============================================================================
# Render Cadence
# =============================================================================

TARGET_RENDER_FPS: Final[int] = 60

# =============================================================================
# Frame Skipper Thresholds
# =============================================================================
# avg decode > SLOW  -> "slow" sample
# avg decode < GOOD  -> "good" sample
# otherwise          -> neutral band (both streaks reset)

SKIP_SLOW_THRESHOLD_MS: Final[float] = 30.0
SKIP_GOOD_THRESHOLD_MS: Final[float] = 20.0

# =============================================================================
# Frame Skipper Hysteresis (streak lengths)
# =============================================================================

SKIP_ENTER_SKIP2_AFTER: Final[int] = 3
SKIP_ENTER_SKIP3_AFTER: Final[int] = 5
SKIP_EXIT_TO_NORMAL_AFTER: Final[int] = 60   # 1s @ 60fps
SKIP_EXIT_TO_SKIP2_AFTER: Final[int] = 30    # 1.5s @ 20fps decode

# Decode cadence divisors per mode
SKIP2_DECODE_EVERY: Final[int] = 2
SKIP3_DECODE_EVERY: Final[int] = 3

# Frame counter is an unsigned 64-bit value; wraps to 0 past the max
FRAME_COUNTER_MAX: Final[int] = 2**64 - 1

# =============================================================================
# Performance Monitor
# =============================================================================

PERF_WINDOW_FRAMES: Final[int] = 120  # 2s @ 60fps

HEALTHY_MAX_DROP_RATE_PCT: Final[float] = 1.0
HEALTHY_MAX_TOTAL_MS: Final[float] = 33.0  # 30fps

DEGRADING_DROP_RATE_PCT: Final[float] = 5.0
DEGRADING_DECODE_MS: Final[float] = 30.0
DEGRADING_TOTAL_MS: Final[float] = 40.0

# =============================================================================
# Memory Pressure (available MB, upper bounds)
# =============================================================================

MEMORY_PRESSURE_CRITICAL_MB: Final[int] = 100
MEMORY_PRESSURE_HIGH_MB: Final[int] = 200
MEMORY_PRESSURE_MEDIUM_MB: Final[int] = 400
MEMORY_PRESSURE_LOW_MB: Final[int] = 800

# =============================================================================
# Observability Cadence
# =============================================================================

PERF_LOG_INTERVAL_S: Final[float] = 5.0
MEMORY_LOG_INTERVAL_S: Final[float] = 10.0

# =============================================================================
# Telemetry Server
# =============================================================================

TELEMETRY_HOST_DEFAULT: Final[str] = "127.0.0.1"
TELEMETRY_PORT_DEFAULT: Final[int] = 8000


# =============================================================================
# Helper Functions
# =============================================================================

def next_frame_counter(counter: int) -> int:
    """
    Advance the u64 frame counter by one.

    Wraps to 0 after FRAME_COUNTER_MAX.
    """
    if counter >= FRAME_COUNTER_MAX:
        return 0
    return counter + 1
