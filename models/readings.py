"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SensorKind(str, Enum):
    """Sensor categories, keyed by their single-letter wire code."""

    temperature = "T"
    pressure = "P"

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_code(cls, code: str) -> "SensorKind":
        for kind in cls:
            if kind.value == code:
                return kind
        raise ValueError(f"Unknown sensor kind code: {code!r}")


@dataclass(frozen=True, slots=True)
class DecodedReading:
    """A single protocol line split into its three fields."""

    kind: SensorKind
    identifier: str
    raw_value: str
