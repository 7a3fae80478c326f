"""Temperature and pressure sensors and their processing policies."""

from __future__ import annotations

import logging
import re
from typing import Dict, Generic, Pattern, Type, Union

from models.readings import SensorKind
from models.reports import ProcessAction, ProcessOutcome, SensorSnapshot
from models.sequence import ReadingSequence, T

logger = logging.getLogger(__name__)

_DECIMAL_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|(?i:infinity|inf|nan)))",
    re.ASCII,
)
_INTEGER_PREFIX = re.compile(r"\s*([+-]?\d+)", re.ASCII)


class _SensorBase(Generic[T]):
    """State and read-only views shared by every sensor variant."""

    kind: SensorKind
    value_type: Type[T]
    value_pattern: Pattern[str]
    unit: str

    def __init__(self, identifier: str) -> None:
        self._identifier = identifier
        self.readings: ReadingSequence[T] = ReadingSequence(self.value_type)
        logger.info(
            "%s sensor initialised.",
            self.kind.label,
            extra={"sensor_id": identifier, "kind": self.kind.value},
        )

    @property
    def identifier(self) -> str:
        return self._identifier

    def add_reading(self, raw: str) -> T:
        """Parse the leading number in ``raw`` and append it.

        Trailing characters after the number are ignored, so ``"1013.5"``
        stores ``1013`` on a pressure sensor. Input with no leading number is
        stored as zero.
        """
        match = self.value_pattern.match(raw)
        if match is not None:
            value = self.value_type(match.group(1))
        else:
            value = self.value_type()
            logger.warning(
                "Unparsable reading stored as zero.",
                extra={
                    "sensor_id": self._identifier,
                    "raw_value": raw,
                    "reason": "degraded_value",
                },
            )
        self.readings.append(value)
        logger.info(
            "Reading added: %s %s",
            value,
            self.unit,
            extra={"sensor_id": self._identifier, "reading_count": self.readings.size()},
        )
        return value

    def describe(self) -> str:
        title = f"=== {self.kind.label} sensor ==="
        lines = [
            title,
            f"ID: {self._identifier}",
            f"Kind: {self.kind.label} ({self.value_type.__name__})",
            f"Readings stored: {self.readings.size()}",
            f"Readings: {self.readings.render()}",
            "=" * len(title),
        ]
        return "\n".join(lines)

    def snapshot(self) -> SensorSnapshot:
        return SensorSnapshot(
            sensor_id=self._identifier,
            kind=self.kind,
            reading_count=self.readings.size(),
            readings=list(self.readings),
        )

    def release(self) -> int:
        released = self.readings.clear()
        logger.info(
            "Sensor released.",
            extra={"sensor_id": self._identifier, "reading_count": released},
        )
        return released

    def _outcome(self, action: ProcessAction, value: Union[int, float, None] = None) -> ProcessOutcome:
        outcome = ProcessOutcome(
            sensor_id=self._identifier,
            kind=self.kind,
            action=action,
            value=value,
            reading_count=self.readings.size(),
        )
        level = logging.WARNING if action is ProcessAction.empty else logging.INFO
        logger.log(
            level,
            "Processed sensor.",
            extra={
                "sensor_id": self._identifier,
                "action": action.value,
                "value": value,
                "reading_count": outcome.reading_count,
            },
        )
        return outcome

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._identifier!r}, readings={self.readings.size()})"


class TemperatureSensor(_SensorBase[float]):
    """Float readings; each pass strips the lowest reading as noise until one remains."""

    kind = SensorKind.temperature
    value_type = float
    value_pattern = _DECIMAL_PREFIX
    unit = "°C"

    def process(self) -> ProcessOutcome:
        if self.readings.is_empty():
            return self._outcome(ProcessAction.empty)

        if self.readings.size() > 1:
            lowest = self.readings.remove_min()
            return self._outcome(ProcessAction.removed_min, lowest)

        return self._outcome(ProcessAction.mean, self.readings.mean())


class PressureSensor(_SensorBase[int]):
    """Integer readings averaged without discarding any of them."""

    kind = SensorKind.pressure
    value_type = int
    value_pattern = _INTEGER_PREFIX
    unit = "hPa"

    def process(self) -> ProcessOutcome:
        if self.readings.is_empty():
            return self._outcome(ProcessAction.empty)

        return self._outcome(ProcessAction.mean, self.readings.mean())


Sensor = Union[TemperatureSensor, PressureSensor]

_SENSOR_TYPES: Dict[SensorKind, Type[Sensor]] = {
    SensorKind.temperature: TemperatureSensor,
    SensorKind.pressure: PressureSensor,
}


def create_sensor(kind: SensorKind, identifier: str) -> Sensor:
    """Build the sensor variant that handles ``kind``."""
    try:
        sensor_type = _SENSOR_TYPES[kind]
    except KeyError as exc:
        raise ValueError(f"No sensor type registered for kind {kind!r}.") from exc
    return sensor_type(identifier)
