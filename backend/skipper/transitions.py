"""
Pure frame skipper transition reducer.

(state, avg_decode_ms, config) -> (new_state, transition | None)

Rules:
- Pure: no side effects, no IO, no clocks, no locks.
- Deterministic: output depends only on inputs.
- At most one mode transition per call.
- Samples are not validated: NaN compares false on both sides and lands
  in the neutral band; negative values classify as good.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from constants import next_frame_counter
from skipper.enums.classification import SampleClass
from skipper.enums.mode import Mode
from skipper.state_dataclass import SkipperConfig, SkipperState


# =============================================================================
# Transition Record
# =============================================================================

DECISION_DEGRADING = "degrading"
DECISION_STILL_DEGRADING = "still_degrading"
DECISION_RECOVERED = "recovered"
DECISION_IMPROVING = "improving"


@dataclass(frozen=True)
class ModeTransition:
    """Describes a single mode change, for logging by the caller."""
    from_mode: Mode
    to_mode: Mode
    decision: str


# =============================================================================
# Classification
# =============================================================================

def classify(avg_decode_ms: float, config: SkipperConfig) -> SampleClass:
    """Classify one sample against the thresholds in force."""
    if avg_decode_ms > config.slow_threshold_ms:
        return SampleClass.SLOW
    if avg_decode_ms < config.good_threshold_ms:
        return SampleClass.GOOD
    return SampleClass.NEUTRAL


def _apply_streaks(state: SkipperState, sample: SampleClass) -> SkipperState:
    if sample is SampleClass.SLOW:
        return replace(state, consecutive_slow=state.consecutive_slow + 1, consecutive_good=0)
    if sample is SampleClass.GOOD:
        return replace(state, consecutive_good=state.consecutive_good + 1, consecutive_slow=0)
    # Neutral band: borderline samples make no progress either way
    return replace(state, consecutive_slow=0, consecutive_good=0)


# =============================================================================
# Mode Ladder
# =============================================================================

def _transition(
    state: SkipperState,
    config: SkipperConfig,
) -> tuple[SkipperState, ModeTransition | None]:
    mode = state.mode

    if mode is Mode.NORMAL:
        if state.consecutive_slow >= config.enter_skip2_after:
            return (
                replace(state, mode=Mode.SKIP2, consecutive_slow=0),
                ModeTransition(Mode.NORMAL, Mode.SKIP2, DECISION_DEGRADING),
            )
        return state, None

    if mode is Mode.SKIP2:
        # Escalation is checked first and wins a (theoretical) tie
        if state.consecutive_slow >= config.enter_skip3_after:
            return (
                replace(state, mode=Mode.SKIP3, consecutive_slow=0),
                ModeTransition(Mode.SKIP2, Mode.SKIP3, DECISION_STILL_DEGRADING),
            )
        if state.consecutive_good >= config.exit_to_normal_after:
            return (
                replace(state, mode=Mode.NORMAL, consecutive_good=0),
                ModeTransition(Mode.SKIP2, Mode.NORMAL, DECISION_RECOVERED),
            )
        return state, None

    if mode is Mode.SKIP3:
        if state.consecutive_good >= config.exit_to_skip2_after:
            return (
                replace(state, mode=Mode.SKIP2, consecutive_good=0),
                ModeTransition(Mode.SKIP3, Mode.SKIP2, DECISION_IMPROVING),
            )
        return state, None

    return state, None


# =============================================================================
# Reducer
# =============================================================================

def reduce(
    state: SkipperState,
    avg_decode_ms: float,
    config: SkipperConfig,
) -> tuple[SkipperState, ModeTransition | None]:
    """
    Advance the frame skipper by one performance sample.

    Steps:
    1. Increment frame_counter (u64, wrapping)
    2. Classify the sample and update streak counters
    3. Apply at most one mode transition; the streak that triggered it
       is reset so the new mode starts its own clock
    """
    state = replace(state, frame_counter=next_frame_counter(state.frame_counter))
    state = _apply_streaks(state, classify(avg_decode_ms, config))
    return _transition(state, config)
