"""Ordered collection of sensors keyed by identifier."""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple

from models.readings import SensorKind
from models.reports import ProcessOutcome, SensorSnapshot
from services.sensors import Sensor, create_sensor

logger = logging.getLogger(__name__)


class SensorRegistry:
    """Owns every sensor it holds and releases them in insertion order on close."""

    def __init__(self) -> None:
        self._sensors: List[Sensor] = []
        self._closed = False
        logger.info("Sensor registry initialised.")

    def insert(self, sensor: Sensor) -> None:
        """Take ownership of ``sensor``; callers are responsible for uniqueness."""
        first = not self._sensors
        self._sensors.append(sensor)
        self._closed = False
        logger.info(
            "First sensor registered." if first else "Sensor registered.",
            extra={"sensor_id": sensor.identifier, "kind": sensor.kind.value},
        )

    def find(self, identifier: str) -> Optional[Sensor]:
        for sensor in self._sensors:
            if sensor.identifier == identifier:
                return sensor
        return None

    def find_or_create(self, kind: SensorKind, identifier: str) -> Tuple[Sensor, bool]:
        """Return the sensor for ``identifier``, creating one of ``kind`` if absent."""
        sensor = self.find(identifier)
        if sensor is not None:
            return sensor, False

        sensor = create_sensor(kind, identifier)
        self.insert(sensor)
        return sensor, True

    def process_all(self) -> List[ProcessOutcome]:
        if not self._sensors:
            logger.warning("No sensors to process.", extra={"reason": "empty_registry"})
            return []
        return [sensor.process() for sensor in self._sensors]

    def describe_all(self) -> str:
        if not self._sensors:
            return "No sensors registered."

        blocks = [f"Total sensors: {len(self._sensors)}"]
        for position, sensor in enumerate(self._sensors, start=1):
            blocks.append(f"{position}. {sensor.describe()}")
        return "\n\n".join(blocks)

    def snapshots(self) -> List[SensorSnapshot]:
        return [sensor.snapshot() for sensor in self._sensors]

    def count(self) -> int:
        return len(self._sensors)

    def close(self) -> None:
        """Release every owned sensor exactly once, oldest first."""
        if self._closed:
            return
        for sensor in self._sensors:
            sensor.release()
        released = len(self._sensors)
        self._sensors.clear()
        self._closed = True
        logger.info("Sensor registry closed; released %d sensor(s).", released)

    def __enter__(self) -> "SensorRegistry":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __len__(self) -> int:
        return len(self._sensors)

    def __iter__(self) -> Iterator[Sensor]:
        return iter(list(self._sensors))
