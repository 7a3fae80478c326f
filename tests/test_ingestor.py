"""Tests for the bounded ingestion loop and byte sources."""

from __future__ import annotations

from pathlib import Path

from services.ingestor import drain, run_ingestion
from services.protocol import LineProtocolParser
from services.registry import SensorRegistry
from sources.replay import ReplayByteSource


class _StepClock:
    """Advances by a fixed step every time it is read."""

    def __init__(self, step: float) -> None:
        self.step = step
        self.now = 0.0

    def __call__(self) -> float:
        current = self.now
        self.now += self.step
        return current


def test_run_ingestion_feeds_bytes_until_window_closes() -> None:
    registry = SensorRegistry()
    parser = LineProtocolParser(registry)
    source = ReplayByteSource(b"T,T-001,45.3\nP,P-105,1013\n")
    sleeps: list[float] = []

    summary = run_ingestion(
        source,
        parser,
        duration=100.0,
        poll_interval=0.5,
        clock=_StepClock(1.0),
        sleep=sleeps.append,
    )

    assert source.exhausted
    assert summary.accepted == 2
    assert registry.count() == 2
    assert sleeps and all(value == 0.5 for value in sleeps)
    registry.close()


def test_run_ingestion_stops_at_deadline_with_pending_bytes() -> None:
    registry = SensorRegistry()
    parser = LineProtocolParser(registry)
    source = ReplayByteSource(b"T,T-001,45.3\n" * 10)

    summary = run_ingestion(
        source,
        parser,
        duration=5.0,
        clock=_StepClock(1.0),
        sleep=lambda _seconds: None,
    )

    assert not source.exhausted
    assert summary.lines == 0
    assert registry.count() == 0


def test_drain_consumes_replay_file(tmp_path: Path) -> None:
    capture = tmp_path / "capture.txt"
    capture.write_bytes(b"P,P-105,1013\r\nP,P-105,1015\r\nX,Z-1,10\r\n")
    registry = SensorRegistry()
    parser = LineProtocolParser(registry)

    summary = drain(ReplayByteSource.from_path(capture), parser)

    assert summary.lines == 3
    assert summary.accepted == 2
    assert summary.rejected == 1
    assert registry.find("P-105") is not None
    registry.close()


def test_replay_source_close_exhausts_stream() -> None:
    source = ReplayByteSource(b"abc")

    assert source.read_byte() == ord("a")
    source.close()

    assert source.exhausted
    assert source.read_byte() is None
