"""
Performance sample classification.

A sample is classified against the thresholds in force at the time of
the call. No behavior lives here.
"""

from __future__ import annotations

from enum import Enum


class SampleClass(str, Enum):
    """
    SLOW:
        avg decode time strictly above the slow threshold.

    GOOD:
        avg decode time strictly below the good threshold.

    NEUTRAL:
        Anything else, including NaN. Resets both streak counters.
    """

    SLOW = "slow"
    GOOD = "good"
    NEUTRAL = "neutral"
