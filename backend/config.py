"""
Application configuration.

Responsibilities:
- Load deployment-specific configuration
- Read environment variables
- Provide a typed, immutable config object

Non-responsibilities:
- No scheduling logic
- No policy constants (see constants.py)
- No runtime mutation (threshold tuning goes through FrameSkipper.configure)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from constants import (
    PERF_WINDOW_FRAMES,
    SKIP_ENTER_SKIP2_AFTER,
    SKIP_ENTER_SKIP3_AFTER,
    SKIP_EXIT_TO_NORMAL_AFTER,
    SKIP_EXIT_TO_SKIP2_AFTER,
    SKIP_GOOD_THRESHOLD_MS,
    SKIP_SLOW_THRESHOLD_MS,
    TELEMETRY_HOST_DEFAULT,
    TELEMETRY_PORT_DEFAULT,
)
from skipper.state_dataclass import SkipperConfig


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable application configuration.

    Constructed once at process startup.
    Passed downward to the playback loop and the telemetry server.
    """

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    env: str = "dev"
    log_level: str = "INFO"

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    enable_json_logs: bool = True

    # ------------------------------------------------------------------
    # Frame skipper thresholds / hysteresis
    # ------------------------------------------------------------------

    slow_threshold_ms: float = SKIP_SLOW_THRESHOLD_MS
    good_threshold_ms: float = SKIP_GOOD_THRESHOLD_MS
    enter_skip2_after: int = SKIP_ENTER_SKIP2_AFTER
    enter_skip3_after: int = SKIP_ENTER_SKIP3_AFTER
    exit_to_normal_after: int = SKIP_EXIT_TO_NORMAL_AFTER
    exit_to_skip2_after: int = SKIP_EXIT_TO_SKIP2_AFTER

    # ------------------------------------------------------------------
    # Performance monitor
    # ------------------------------------------------------------------

    perf_window_frames: int = PERF_WINDOW_FRAMES

    # ------------------------------------------------------------------
    # Telemetry server
    # ------------------------------------------------------------------

    telemetry_host: str = TELEMETRY_HOST_DEFAULT
    telemetry_port: int = TELEMETRY_PORT_DEFAULT

    # ------------------------------------------------------------------
    # Derived
    # ------------------------------------------------------------------

    def skipper_config(self) -> SkipperConfig:
        """Build the frame skipper configuration from this app config."""
        return SkipperConfig(
            slow_threshold_ms=self.slow_threshold_ms,
            good_threshold_ms=self.good_threshold_ms,
            enter_skip2_after=self.enter_skip2_after,
            enter_skip3_after=self.enter_skip3_after,
            exit_to_normal_after=self.exit_to_normal_after,
            exit_to_skip2_after=self.exit_to_skip2_after,
        )

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @staticmethod
    def load_from_env() -> AppConfig:
        """
        Load configuration from environment variables.

        Raises:
            ValueError if a numeric variable cannot be parsed.
        """
        env = os.environ
        return AppConfig(
            env=env.get("ENV", "dev"),
            log_level=env.get("LOG_LEVEL", "INFO"),

            enable_json_logs=env.get("ENABLE_JSON_LOGS", "1") == "1",

            slow_threshold_ms=float(env.get("SKIP_SLOW_THRESHOLD_MS", SKIP_SLOW_THRESHOLD_MS)),
            good_threshold_ms=float(env.get("SKIP_GOOD_THRESHOLD_MS", SKIP_GOOD_THRESHOLD_MS)),
            enter_skip2_after=int(env.get("SKIP_ENTER_SKIP2_AFTER", SKIP_ENTER_SKIP2_AFTER)),
            enter_skip3_after=int(env.get("SKIP_ENTER_SKIP3_AFTER", SKIP_ENTER_SKIP3_AFTER)),
            exit_to_normal_after=int(env.get("SKIP_EXIT_TO_NORMAL_AFTER", SKIP_EXIT_TO_NORMAL_AFTER)),
            exit_to_skip2_after=int(env.get("SKIP_EXIT_TO_SKIP2_AFTER", SKIP_EXIT_TO_SKIP2_AFTER)),

            perf_window_frames=int(env.get("PERF_WINDOW_FRAMES", PERF_WINDOW_FRAMES)),

            telemetry_host=env.get("TELEMETRY_HOST", TELEMETRY_HOST_DEFAULT),
            telemetry_port=int(env.get("TELEMETRY_PORT", TELEMETRY_PORT_DEFAULT)),
        )
