"""
Frame skip mode enumeration.

Rules:
- Closed set: NORMAL, SKIP2, SKIP3 (ordered by aggressiveness).
- Transitions are defined exclusively in skipper.transitions.
"""

from __future__ import annotations

from enum import Enum


class Mode(str, Enum):
    """
    Decode cadence regime of the frame skipper.

    NORMAL:
        Decode attempted on every render (60fps decode).

    SKIP2:
        Decode attempted on every 2nd render (30fps effective).

    SKIP3:
        Decode attempted on every 3rd render (20fps effective).
    """

    NORMAL = "NORMAL"
    SKIP2 = "SKIP2"
    SKIP3 = "SKIP3"

    @property
    def label(self) -> str:
        """Human-readable name used in performance log lines."""
        return _LABELS[self]


_LABELS: dict[Mode, str] = {
    Mode.NORMAL: "Normal(60fps)",
    Mode.SKIP2: "Skip2(30fps)",
    Mode.SKIP3: "Skip3(20fps)",
}
