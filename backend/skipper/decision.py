"""
Frame skip decision value objects.

Rules:
- SkipDecision is produced fresh on every decide() call and never retained.
- Reason tokens are a stable, closed set intended for logging/telemetry.
  Callers must branch on should_decode, never on the reason.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final

from constants import SKIP2_DECODE_EVERY, SKIP3_DECODE_EVERY
from skipper.enums.mode import Mode


# =============================================================================
# Reason Tokens
# =============================================================================

REASON_NORMAL_DECODE_ALL: Final[str] = "normal:decode_all"
REASON_SKIP2_DECODE: Final[str] = "skip2:decode"
REASON_SKIP2_SKIP: Final[str] = "skip2:skip"
REASON_SKIP3_DECODE: Final[str] = "skip3:decode"
REASON_SKIP3_SKIP: Final[str] = "skip3:skip"
REASON_FALLBACK_DECODE: Final[str] = "fallback:decode"


@dataclass(frozen=True)
class SkipDecision:
    """
    Go / skip verdict for one render iteration.

    should_decode and should_skip are always complementary.
    current_mode is the (possibly just-updated) mode that produced it.
    """
    should_decode: bool
    should_skip: bool
    reason: str
    current_mode: Mode


@dataclass(frozen=True)
class SkipperStats:
    """Consistent snapshot of frame skipper control state."""
    mode: Mode
    frame_counter: int
    consecutive_slow: int
    consecutive_good: int

    def to_dict(self) -> dict[str, Any]:
        """Flat dict for JSONL logging and HTTP responses."""
        return {
            "mode": self.mode.value,
            "frame_counter": self.frame_counter,
            "consecutive_slow": self.consecutive_slow,
            "consecutive_good": self.consecutive_good,
        }


def _cadence(mode: Mode, frame_counter: int, every: int, decode: str, skip: str) -> SkipDecision:
    should_decode = frame_counter % every == 0
    return SkipDecision(
        should_decode=should_decode,
        should_skip=not should_decode,
        reason=decode if should_decode else skip,
        current_mode=mode,
    )


def derive_decision(mode: Mode, frame_counter: int) -> SkipDecision:
    """
    Derive the decode verdict from mode and frame counter.

    Pure: no state, no clocks, no logging.
    An unrecognized mode always decodes ("fallback:decode").
    """
    if mode is Mode.NORMAL:
        return SkipDecision(
            should_decode=True,
            should_skip=False,
            reason=REASON_NORMAL_DECODE_ALL,
            current_mode=mode,
        )

    if mode is Mode.SKIP2:
        return _cadence(mode, frame_counter, SKIP2_DECODE_EVERY, REASON_SKIP2_DECODE, REASON_SKIP2_SKIP)

    if mode is Mode.SKIP3:
        return _cadence(mode, frame_counter, SKIP3_DECODE_EVERY, REASON_SKIP3_DECODE, REASON_SKIP3_SKIP)

    # Unreachable for the closed Mode set; bias toward doing the work
    return SkipDecision(
        should_decode=True,
        should_skip=False,
        reason=REASON_FALLBACK_DECODE,
        current_mode=mode,
    )
