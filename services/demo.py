"""Fixed readings used when no serial device is attached."""

from __future__ import annotations

import logging

from services.registry import SensorRegistry
from services.sensors import PressureSensor, TemperatureSensor

logger = logging.getLogger(__name__)

DEMO_TEMPERATURE_ID = "T-001"
DEMO_PRESSURE_ID = "P-105"
DEMO_TEMPERATURES = ("45.3", "42.1", "47.8")
DEMO_PRESSURES = ("1013", "1015", "1012")


def seed_demo_registry(registry: SensorRegistry) -> SensorRegistry:
    logger.info("Seeding demo sensors.")
    temperature = TemperatureSensor(DEMO_TEMPERATURE_ID)
    pressure = PressureSensor(DEMO_PRESSURE_ID)
    registry.insert(temperature)
    registry.insert(pressure)

    for raw in DEMO_TEMPERATURES:
        temperature.add_reading(raw)
    for raw in DEMO_PRESSURES:
        pressure.add_reading(raw)
    return registry
