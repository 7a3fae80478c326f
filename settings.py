from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


_SERIAL_PORT_ENV = "SERIAL_PORT"
_BAUDRATE_ENV = "SERIAL_BAUDRATE"
_DURATION_ENV = "INGEST_DURATION_SECONDS"
_POLL_INTERVAL_ENV = "INGEST_POLL_INTERVAL"
_LINE_CAPACITY_ENV = "LINE_BUFFER_CAPACITY"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    serial_port: str
    baudrate: int
    ingest_duration: float
    poll_interval: float
    line_capacity: int
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_positive_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_positive_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        serial_port=_read_str_env(_SERIAL_PORT_ENV, "/dev/ttyUSB0"),
        baudrate=_read_positive_int(_BAUDRATE_ENV, 115200),
        ingest_duration=_read_positive_float(_DURATION_ENV, 30.0),
        poll_interval=_read_positive_float(_POLL_INTERVAL_ENV, 0.01),
        line_capacity=_read_positive_int(_LINE_CAPACITY_ENV, 255),
        log_level=_read_log_level("INFO"),
    )
