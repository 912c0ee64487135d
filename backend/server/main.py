"""
Telemetry server runner.

Responsibilities:
- Load configuration (.env + environment)
- Serve the telemetry / tuning API for a running PlaybackLoop, sharing
  that loop's FrameSkipper and PerformanceMonitor
- Run uvicorn on a daemon thread next to the render loop

The render loop owns the skipper; a server without a loop would only
ever report the initial state, so there is no standalone entry point.
"""

from __future__ import annotations

import threading

import uvicorn
from dotenv import load_dotenv

from config import AppConfig
from playback.loop import PlaybackLoop
from server.app import create_app


def load_config() -> AppConfig:
    """Load .env into the environment, then build AppConfig from it."""
    load_dotenv()
    return AppConfig.load_from_env()


def build_server(loop: PlaybackLoop, config: AppConfig) -> uvicorn.Server:
    """Build (but do not start) a uvicorn server bound to the loop's state."""
    app = create_app(config, skipper=loop.skipper, monitor=loop.monitor)
    return uvicorn.Server(
        uvicorn.Config(
            app,
            host=config.telemetry_host,
            port=config.telemetry_port,
            log_level=config.log_level.lower(),
        )
    )


def serve_in_background(
    loop: PlaybackLoop,
    config: AppConfig | None = None,
) -> tuple[uvicorn.Server, threading.Thread]:
    """
    Start the telemetry server on a daemon thread.

    Set `server.should_exit = True` to stop it.
    """
    server = build_server(loop, config or load_config())
    thread = threading.Thread(target=server.run, name="telemetry-server", daemon=True)
    thread.start()
    return server, thread
