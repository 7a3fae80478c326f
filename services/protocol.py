"""Line framing and decoding for the ``<KIND>,<ID>,<VALUE>`` serial protocol."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from models.readings import DecodedReading, SensorKind
from services.registry import SensorRegistry

logger = logging.getLogger(__name__)

DEFAULT_LINE_CAPACITY = 255
FIELD_DELIMITER = ","
_TERMINATORS = frozenset(b"\n\r")


class LineDecodeError(ValueError):
    """Raised when a framed line does not match the protocol."""

    def __init__(self, reason: str, line: str) -> None:
        super().__init__(f"{reason}: {line!r}")
        self.reason = reason
        self.line = line


class FramerState(str, Enum):
    accumulating = "accumulating"
    line_ready = "line_ready"


class LineFramer:
    """Accumulates bytes into lines terminated by ``\\n`` or ``\\r``.

    Empty lines are never emitted. Bytes that arrive once ``capacity`` is
    reached are dropped until the next terminator.
    """

    def __init__(self, capacity: int = DEFAULT_LINE_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("Line capacity must be positive.")
        self.capacity = capacity
        self._buffer = bytearray()
        self._state = FramerState.accumulating

    @property
    def state(self) -> FramerState:
        return self._state

    @property
    def pending(self) -> bytes:
        return bytes(self._buffer)

    def feed_byte(self, byte: Union[int, bytes]) -> Optional[str]:
        """Consume one byte and return a completed line, if any."""
        if isinstance(byte, (bytes, bytearray)):
            if len(byte) != 1:
                raise ValueError("feed_byte expects exactly one byte.")
            byte = byte[0]

        # A line emitted by the previous call has been handed over.
        self._state = FramerState.accumulating

        if byte in _TERMINATORS:
            if not self._buffer:
                return None
            line = self._buffer.decode("ascii", errors="replace")
            self._buffer.clear()
            self._state = FramerState.line_ready
            return line

        if len(self._buffer) < self.capacity:
            self._buffer.append(byte)
        return None

    def feed(self, data: bytes) -> List[str]:
        lines: List[str] = []
        for byte in data:
            line = self.feed_byte(byte)
            if line is not None:
                lines.append(line)
        return lines


def decode_line(line: str) -> DecodedReading:
    """Split a framed line into kind, identifier and raw value.

    The kind code and identifier are taken verbatim; only the value is
    stripped of surrounding whitespace.
    """
    fields = line.split(FIELD_DELIMITER)
    if len(fields) != 3:
        raise LineDecodeError("malformed field count", line)

    code, identifier, raw_value = fields[0], fields[1], fields[2].strip()
    if not (code and identifier and raw_value):
        raise LineDecodeError("malformed field count", line)

    try:
        kind = SensorKind.from_code(code)
    except ValueError as exc:
        raise LineDecodeError("unknown sensor kind", line) from exc

    return DecodedReading(kind=kind, identifier=identifier, raw_value=raw_value)


@dataclass
class IngestionSummary:
    """Counters for the lines seen by a parser."""

    lines: int = 0
    accepted: int = 0
    rejected: int = 0
    sensors_created: int = 0


class LineProtocolParser:
    """Frames incoming bytes and routes each decoded reading into a registry."""

    def __init__(self, registry: SensorRegistry, framer: Optional[LineFramer] = None) -> None:
        self.registry = registry
        self.framer = framer or LineFramer()
        self.summary = IngestionSummary()

    def feed_byte(self, byte: Union[int, bytes]) -> Optional[DecodedReading]:
        line = self.framer.feed_byte(byte)
        if line is None:
            return None
        return self.ingest_line(line)

    def feed(self, data: bytes) -> List[DecodedReading]:
        decoded: List[DecodedReading] = []
        for line in self.framer.feed(data):
            reading = self.ingest_line(line)
            if reading is not None:
                decoded.append(reading)
        return decoded

    def ingest_line(self, line: str) -> Optional[DecodedReading]:
        """Decode ``line`` and apply it to the registry; bad lines are dropped."""
        self.summary.lines += 1
        logger.debug("Line received.", extra={"line": line})

        try:
            reading = decode_line(line)
        except LineDecodeError as exc:
            self.summary.rejected += 1
            logger.warning(
                "Discarding malformed line.",
                extra={"line": exc.line, "reason": exc.reason},
            )
            return None

        sensor, created = self.registry.find_or_create(reading.kind, reading.identifier)
        if created:
            self.summary.sensors_created += 1
            logger.info(
                "New %s sensor created from serial input.",
                reading.kind.label.lower(),
                extra={"sensor_id": reading.identifier, "kind": reading.kind.value},
            )
        elif sensor.kind is not reading.kind:
            logger.warning(
                "Kind code does not match the registered sensor; routing by identifier.",
                extra={
                    "sensor_id": reading.identifier,
                    "kind": reading.kind.value,
                    "reason": "kind_mismatch",
                },
            )

        sensor.add_reading(reading.raw_value)
        self.summary.accepted += 1
        return reading
