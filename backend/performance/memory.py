"""
System and process memory probing.

Pure reads via psutil plus a pressure classification used in the periodic
MEMORY_SNAPSHOT log line of the playback loop.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum

import psutil

from constants import (
    MEMORY_PRESSURE_CRITICAL_MB,
    MEMORY_PRESSURE_HIGH_MB,
    MEMORY_PRESSURE_LOW_MB,
    MEMORY_PRESSURE_MEDIUM_MB,
)
from observability.logger import log_event

_MB = 1024 * 1024


@dataclass(frozen=True)
class MemorySnapshot:
    """System-wide memory at a point in time (MB)."""
    ts_ms: int
    total_mb: int
    available_mb: int
    used_mb: int
    free_mb: int


@dataclass(frozen=True)
class ProcessMemoryStats:
    """Memory held by this process (MB)."""
    rss_mb: int
    vms_mb: int
    num_threads: int


class MemoryPressure(str, Enum):
    """Pressure level derived from available system memory."""

    NONE = "None"          # >= 800MB available
    LOW = "Low"            # 400-800MB
    MEDIUM = "Medium"      # 200-400MB
    HIGH = "High"          # 100-200MB
    CRITICAL = "Critical"  # < 100MB


def get_system_memory() -> MemorySnapshot:
    vm = psutil.virtual_memory()
    return MemorySnapshot(
        ts_ms=int(time.time() * 1000),
        total_mb=vm.total // _MB,
        available_mb=vm.available // _MB,
        used_mb=vm.used // _MB,
        free_mb=vm.free // _MB,
    )


def get_process_memory() -> ProcessMemoryStats:
    proc = psutil.Process()
    info = proc.memory_info()
    return ProcessMemoryStats(
        rss_mb=info.rss // _MB,
        vms_mb=info.vms // _MB,
        num_threads=proc.num_threads(),
    )


def classify_pressure(available_mb: int) -> MemoryPressure:
    if available_mb < MEMORY_PRESSURE_CRITICAL_MB:
        return MemoryPressure.CRITICAL
    if available_mb < MEMORY_PRESSURE_HIGH_MB:
        return MemoryPressure.HIGH
    if available_mb < MEMORY_PRESSURE_MEDIUM_MB:
        return MemoryPressure.MEDIUM
    if available_mb < MEMORY_PRESSURE_LOW_MB:
        return MemoryPressure.LOW
    return MemoryPressure.NONE


def get_memory_pressure() -> MemoryPressure:
    return classify_pressure(get_system_memory().available_mb)


def is_low_memory(threshold_mb: int) -> bool:
    return get_system_memory().available_mb < threshold_mb


def log_memory_snapshot() -> None:
    """
    Emit one MEMORY_SNAPSHOT event.

    psutil failures are logged as MEMORY_SNAPSHOT_FAILED; the render loop
    keeps running.
    """
    try:
        system = get_system_memory()
        process = get_process_memory()
    except psutil.Error as exc:
        log_event({
            "ts_ms": int(time.time() * 1000),
            "event_type": "MEMORY_SNAPSHOT_FAILED",
            "exception": type(exc).__name__,
            "message": str(exc),
        })
        return

    log_event({
        "ts_ms": system.ts_ms,
        "event_type": "MEMORY_SNAPSHOT",
        "system": {
            "total_mb": system.total_mb,
            "available_mb": system.available_mb,
            "used_mb": system.used_mb,
            "free_mb": system.free_mb,
        },
        "process": {
            "rss_mb": process.rss_mb,
            "vms_mb": process.vms_mb,
            "threads": process.num_threads,
        },
        "pressure": classify_pressure(system.available_mb).value,
    })
