"""Tests for sensor registration, lookup, processing and teardown."""

from __future__ import annotations

import logging

import pytest

from models.readings import SensorKind
from models.reports import ProcessAction
from services.demo import seed_demo_registry
from services.registry import SensorRegistry
from services.sensors import PressureSensor, TemperatureSensor


@pytest.fixture()
def registry() -> SensorRegistry:
    registry = SensorRegistry()
    yield registry
    registry.close()


def test_find_returns_inserted_sensors(registry: SensorRegistry) -> None:
    temperature = TemperatureSensor("T-001")
    pressure = PressureSensor("P-105")
    registry.insert(temperature)
    registry.insert(pressure)

    assert registry.find("T-001") is temperature
    assert registry.find("P-105") is pressure
    assert registry.find("X-999") is None
    assert registry.count() == 2


def test_insert_does_not_check_uniqueness(registry: SensorRegistry) -> None:
    first = TemperatureSensor("T-001")
    registry.insert(first)
    registry.insert(TemperatureSensor("T-001"))

    assert registry.count() == 2
    assert registry.find("T-001") is first


def test_find_or_create_reuses_existing_sensor(registry: SensorRegistry) -> None:
    created, was_created = registry.find_or_create(SensorKind.pressure, "P-1")
    again, created_again = registry.find_or_create(SensorKind.pressure, "P-1")

    assert was_created is True
    assert created_again is False
    assert again is created
    assert isinstance(created, PressureSensor)
    assert registry.count() == 1


def test_process_all_on_empty_registry_warns(registry: SensorRegistry, caplog) -> None:
    with caplog.at_level(logging.WARNING):
        outcomes = registry.process_all()

    assert outcomes == []
    assert any(getattr(r, "reason", None) == "empty_registry" for r in caplog.records)


def test_process_all_visits_every_sensor_in_order(registry: SensorRegistry) -> None:
    registry.insert(TemperatureSensor("T-empty"))
    seed_demo_registry(registry)

    outcomes = registry.process_all()

    assert [o.sensor_id for o in outcomes] == ["T-empty", "T-001", "P-105"]
    assert [o.action for o in outcomes] == [
        ProcessAction.empty,
        ProcessAction.removed_min,
        ProcessAction.mean,
    ]
    assert outcomes[1].value == 42.1
    assert outcomes[2].value == 1013


def test_describe_all_numbers_sensors_in_insertion_order(registry: SensorRegistry) -> None:
    seed_demo_registry(registry)

    text = registry.describe_all()

    assert text.startswith("Total sensors: 2")
    assert "1. === Temperature sensor ===" in text
    assert "2. === Pressure sensor ===" in text
    assert text.index("T-001") < text.index("P-105")


def test_describe_all_on_empty_registry(registry: SensorRegistry) -> None:
    assert registry.describe_all() == "No sensors registered."


def test_close_releases_each_sensor_once_in_order(monkeypatch) -> None:
    registry = SensorRegistry()
    seed_demo_registry(registry)
    released: list[str] = []

    for sensor in registry:
        original = sensor.release

        def _tracking_release(original=original, sensor=sensor) -> int:
            released.append(sensor.identifier)
            return original()

        monkeypatch.setattr(sensor, "release", _tracking_release)

    sensors = list(registry)
    registry.close()
    registry.close()

    assert released == ["T-001", "P-105"]
    assert registry.count() == 0
    assert all(sensor.readings.is_empty() for sensor in sensors)


def test_context_manager_closes_registry() -> None:
    with SensorRegistry() as registry:
        sensor, _ = registry.find_or_create(SensorKind.temperature, "T-1")
        sensor.add_reading("20.0")

    assert len(registry) == 0
    assert sensor.readings.is_empty()


def test_snapshots_follow_insertion_order(registry: SensorRegistry) -> None:
    seed_demo_registry(registry)

    snapshots = registry.snapshots()

    assert [s.sensor_id for s in snapshots] == ["T-001", "P-105"]
    assert snapshots[0].readings == [45.3, 42.1, 47.8]
    assert snapshots[1].readings == [1013, 1015, 1012]
