"""
FastAPI app factory.

Responsibilities:
- Create and configure the FastAPI app
- Set up middleware
- Initialize shared resources (one FrameSkipper + one PerformanceMonitor)
- Register routes
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import AppConfig
from observability import logger
from performance.monitor import PerformanceMonitor
from skipper.frame_skipper import FrameSkipper

from server.routes import register_routes


def create_app(
    config: AppConfig | None = None,
    *,
    skipper: FrameSkipper | None = None,
    monitor: PerformanceMonitor | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    A deployment passes the PlaybackLoop's skipper/monitor (see
    server.main.build_server) so the instances driving the render loop are
    the ones observed and tuned over HTTP.
    """
    config = config or AppConfig.load_from_env()
    logger.set_enabled(config.enable_json_logs)

    app = FastAPI(title="Frame Skipper Telemetry")

    app.state.config = config
    app.state.skipper = skipper or FrameSkipper(config.skipper_config())
    app.state.monitor = monitor or PerformanceMonitor(config.perf_window_frames)

    # Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # tighten later
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routes
    register_routes(app)

    return app
