"""
Route registration for the telemetry / tuning API.

Responsibilities:
- Expose read-only frame skipper and performance snapshots
- Expose reset and threshold tuning for hardware-specific calibration
- Pull dependencies from app.state
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI
from pydantic import BaseModel

from performance.monitor import PerformanceMonitor
from skipper.frame_skipper import FrameSkipper


class ThresholdsBody(BaseModel):
    """Request body for POST /skipper/thresholds."""
    slow_ms: float
    good_ms: float


def register_routes(app: FastAPI) -> None:
    """Register all routes on the FastAPI app."""

    def _skipper() -> FrameSkipper:
        return app.state.skipper

    def _monitor() -> PerformanceMonitor:
        return app.state.monitor

    @app.get("/health")
    async def health() -> dict[str, str]: # pyright: ignore[reportUnusedFunction]
        return {"status": "ok"}

    @app.get("/skipper/mode")
    async def skipper_mode() -> dict[str, str]: # pyright: ignore[reportUnusedFunction]
        mode = _skipper().current_mode()
        return {"mode": mode.value, "label": mode.label}

    @app.get("/skipper/stats")
    async def skipper_stats() -> dict[str, Any]: # pyright: ignore[reportUnusedFunction]
        return _skipper().stats().to_dict()

    @app.post("/skipper/reset")
    async def skipper_reset() -> dict[str, Any]: # pyright: ignore[reportUnusedFunction]
        skipper = _skipper()
        skipper.reset()
        return skipper.stats().to_dict()

    @app.post("/skipper/thresholds")
    async def skipper_thresholds(body: ThresholdsBody) -> dict[str, float]: # pyright: ignore[reportUnusedFunction]
        skipper = _skipper()
        skipper.configure(body.slow_ms, body.good_ms)
        cfg = skipper.config()
        return {
            "slow_threshold_ms": cfg.slow_threshold_ms,
            "good_threshold_ms": cfg.good_threshold_ms,
        }

    @app.get("/performance")
    async def performance() -> dict[str, Any]: # pyright: ignore[reportUnusedFunction]
        monitor = _monitor()
        payload = monitor.get_report().to_dict()
        payload["degrading"] = monitor.is_performance_degrading()
        return payload
