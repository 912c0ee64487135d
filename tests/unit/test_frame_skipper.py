# pylint: disable=missing-module-docstring,missing-function-docstring
from typing import Any

import pytest

import skipper.frame_skipper as frame_skipper_mod
from performance.monitor import PerformanceReport
from skipper.enums.mode import Mode
from skipper.frame_skipper import FrameSkipper
from skipper.state_dataclass import SkipperConfig


def report(avg_decode_ms: float) -> PerformanceReport:
    return PerformanceReport(avg_decode_ms=avg_decode_ms)


@pytest.fixture(name="emitted")
def fixture_emitted(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    captured: list[dict[str, Any]] = []

    def fake_log_event(payload: dict[str, Any]) -> None:
        captured.append(payload)

    monkeypatch.setattr(frame_skipper_mod, "log_event", fake_log_event)
    return captured


def enter_skip2(skipper: FrameSkipper) -> None:
    for _ in range(3):
        skipper.decide(report(35.0))
    assert skipper.current_mode() is Mode.SKIP2


# ---------------------------------------------------------------------
# Concrete scenarios (default configuration)
# ---------------------------------------------------------------------

def test_three_slow_reports_enter_skip2_and_skip(emitted: list[dict[str, Any]]) -> None:
    skipper = FrameSkipper()

    first = skipper.decide(report(35.0))
    second = skipper.decide(report(35.0))
    assert first.current_mode is Mode.NORMAL
    assert second.current_mode is Mode.NORMAL

    third = skipper.decide(report(35.0))

    # Mode change applies to the call that triggered it; 3 % 2 != 0
    assert third.current_mode is Mode.SKIP2
    assert third.should_decode is False
    assert third.should_skip is True
    assert third.reason == "skip2:skip"
    assert skipper.current_mode() is Mode.SKIP2

    assert len(emitted) == 1
    assert emitted[0]["event_type"] == "FRAME_SKIPPER_MODE_CHANGED"
    assert emitted[0]["from_mode"] == "NORMAL"
    assert emitted[0]["to_mode"] == "SKIP2"
    assert emitted[0]["decision"] == "degrading"
    assert emitted[0]["frame_counter"] == 3


def test_good_report_in_normal_has_no_visible_effect(emitted: list[dict[str, Any]]) -> None:
    skipper = FrameSkipper()

    decision = skipper.decide(report(10.0))

    assert decision.current_mode is Mode.NORMAL
    assert decision.should_decode is True
    assert decision.should_skip is False
    assert decision.reason == "normal:decode_all"
    assert not emitted


def test_sixty_good_reports_return_to_normal(emitted: list[dict[str, Any]]) -> None:
    skipper = FrameSkipper()
    enter_skip2(skipper)

    for _ in range(59):
        skipper.decide(report(10.0))
    assert skipper.current_mode() is Mode.SKIP2

    decision = skipper.decide(report(10.0))
    assert decision.current_mode is Mode.NORMAL
    assert decision.reason == "normal:decode_all"
    assert [e["decision"] for e in emitted] == ["degrading", "recovered"]


def test_full_ladder_down_and_up() -> None:
    skipper = FrameSkipper()
    enter_skip2(skipper)

    for _ in range(5):
        decision = skipper.decide(report(50.0))
    assert decision.current_mode is Mode.SKIP3
    # frame_counter == 8; 8 % 3 != 0
    assert decision.reason == "skip3:skip"

    for _ in range(30):
        decision = skipper.decide(report(5.0))
    assert decision.current_mode is Mode.SKIP2


def test_cadence_follows_frame_counter_in_skip_modes() -> None:
    skipper = FrameSkipper()
    enter_skip2(skipper)

    for _ in range(10):
        decision = skipper.decide(report(25.0))  # neutral: stays in SKIP2
        counter = skipper.stats().frame_counter
        assert decision.current_mode is Mode.SKIP2
        assert decision.should_decode == (counter % 2 == 0)
        assert decision.should_skip != decision.should_decode


def test_neutral_report_mid_streak_requires_full_restart() -> None:
    skipper = FrameSkipper()
    skipper.decide(report(35.0))
    skipper.decide(report(35.0))
    skipper.decide(report(25.0))

    stats = skipper.stats()
    assert stats.consecutive_slow == 0
    assert stats.consecutive_good == 0

    skipper.decide(report(35.0))
    skipper.decide(report(35.0))
    assert skipper.current_mode() is Mode.NORMAL

    skipper.decide(report(35.0))
    assert skipper.current_mode() is Mode.SKIP2


# ---------------------------------------------------------------------
# Reset
# ---------------------------------------------------------------------

def test_reset_restores_initial_state_and_is_idempotent(emitted: list[dict[str, Any]]) -> None:
    skipper = FrameSkipper()
    enter_skip2(skipper)
    skipper.decide(report(35.0))

    skipper.reset()
    first = skipper.stats()
    skipper.reset()
    second = skipper.stats()

    expected = {
        "mode": "NORMAL",
        "frame_counter": 0,
        "consecutive_slow": 0,
        "consecutive_good": 0,
    }
    assert first.to_dict() == expected
    assert second == first

    resets = [e for e in emitted if e["event_type"] == "FRAME_SKIPPER_RESET"]
    assert len(resets) == 1
    assert resets[0]["from_mode"] == "SKIP2"


def test_reset_in_normal_is_silent(emitted: list[dict[str, Any]]) -> None:
    skipper = FrameSkipper()
    skipper.decide(report(35.0))
    skipper.reset()

    assert skipper.stats().frame_counter == 0
    assert not emitted


# ---------------------------------------------------------------------
# Configure
# ---------------------------------------------------------------------

def test_configure_applies_on_next_decide(emitted: list[dict[str, Any]]) -> None:
    skipper = FrameSkipper()

    # 12ms is "good" under defaults
    skipper.decide(report(12.0))
    assert skipper.stats().consecutive_good == 1

    skipper.configure(10.0, 5.0)
    assert skipper.config().slow_threshold_ms == 10.0
    assert skipper.config().good_threshold_ms == 5.0

    for _ in range(3):
        skipper.decide(report(12.0))
    assert skipper.current_mode() is Mode.SKIP2

    assert emitted[0]["event_type"] == "FRAME_SKIPPER_THRESHOLDS_UPDATED"
    assert emitted[0]["slow_threshold_ms"] == 10.0


def test_configure_does_not_validate_ordering() -> None:
    skipper = FrameSkipper()
    skipper.configure(5.0, 50.0)

    # 30ms is both > slow and < good; slow is checked first
    skipper.decide(report(30.0))
    assert skipper.stats().consecutive_slow == 1


def test_configure_keeps_hysteresis_lengths() -> None:
    skipper = FrameSkipper(SkipperConfig(enter_skip2_after=7))
    skipper.configure(40.0, 10.0)
    assert skipper.config().enter_skip2_after == 7


# ---------------------------------------------------------------------
# Numeric edge cases
# ---------------------------------------------------------------------

def test_nan_report_resets_streaks() -> None:
    skipper = FrameSkipper()
    skipper.decide(report(35.0))
    skipper.decide(report(35.0))

    decision = skipper.decide(report(float("nan")))

    assert decision.current_mode is Mode.NORMAL
    assert skipper.stats().consecutive_slow == 0


def test_negative_report_counts_as_good() -> None:
    skipper = FrameSkipper()
    skipper.decide(report(-1.0))
    assert skipper.stats().consecutive_good == 1
