from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TypeVar

from settings import get_settings

Number = TypeVar("Number", int, float)


@dataclass(frozen=True)
class CLIConfig:
    serial_port: str
    baudrate: int
    duration: float
    poll_interval: float
    line_capacity: int
    log_level: str


def _positive_or(value: Optional[Number], default: Number) -> Number:
    if value is None or value <= 0:
        return default
    return value


def load_config(
    serial_port: Optional[str] = None,
    baudrate: Optional[int] = None,
    duration: Optional[float] = None,
    poll_interval: Optional[float] = None,
    log_level: Optional[str] = None,
) -> CLIConfig:
    """Merge command-line overrides onto the environment-derived settings."""
    settings = get_settings()
    port = (serial_port or "").strip() or settings.serial_port
    return CLIConfig(
        serial_port=port,
        baudrate=_positive_or(baudrate, settings.baudrate),
        duration=_positive_or(duration, settings.ingest_duration),
        poll_interval=_positive_or(poll_interval, settings.poll_interval),
        line_capacity=settings.line_capacity,
        log_level=(log_level or settings.log_level).upper(),
    )
