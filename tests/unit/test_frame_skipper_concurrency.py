# pylint: disable=missing-module-docstring,missing-function-docstring
import threading

import pytest

import skipper.frame_skipper as frame_skipper_mod
from performance.monitor import PerformanceReport
from skipper.frame_skipper import FrameSkipper


@pytest.fixture(autouse=True)
def _silence_logs(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(frame_skipper_mod, "log_event", lambda payload: None)


SAMPLES = [PerformanceReport(avg_decode_ms=v) for v in (35.0, 35.0, 35.0, 10.0, 25.0, 50.0, 5.0)]


def test_concurrent_writers_are_mutually_exclusive():
    skipper = FrameSkipper()
    per_thread = 2_000
    threads = 4

    def writer() -> None:
        for i in range(per_thread):
            skipper.decide(SAMPLES[i % len(SAMPLES)])

    workers = [threading.Thread(target=writer) for _ in range(threads)]
    for w in workers:
        w.start()
    for w in workers:
        w.join()

    assert skipper.stats().frame_counter == per_thread * threads


def test_readers_never_observe_torn_state():
    skipper = FrameSkipper()
    stop = threading.Event()
    violations: list[str] = []

    def writer() -> None:
        i = 0
        while not stop.is_set():
            skipper.decide(SAMPLES[i % len(SAMPLES)])
            i += 1
            if i % 500 == 0:
                skipper.reset()

    def reader() -> None:
        for _ in range(5_000):
            stats = skipper.stats()
            if stats.consecutive_slow and stats.consecutive_good:
                violations.append(f"both streaks non-zero: {stats}")
            skipper.current_mode()

    w = threading.Thread(target=writer)
    readers = [threading.Thread(target=reader) for _ in range(3)]
    w.start()
    for r in readers:
        r.start()
    for r in readers:
        r.join()
    stop.set()
    w.join()

    assert not violations
