"""Pydantic records describing sensor state and processing results."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from models.readings import SensorKind


class ProcessAction(str, Enum):
    """What a single ``process`` call did to a sensor."""

    empty = "empty"
    removed_min = "removed_min"
    mean = "mean"


class ProcessOutcome(BaseModel):
    """Result of processing one sensor once."""

    sensor_id: str
    kind: SensorKind
    action: ProcessAction
    value: Optional[Union[int, float]] = Field(
        default=None, description="Removed minimum or computed mean, if any."
    )
    reading_count: int = Field(..., ge=0, description="Readings left after processing.")


class SensorSnapshot(BaseModel):
    """Read-only view of a sensor used for listings."""

    sensor_id: str
    kind: SensorKind
    reading_count: int = Field(..., ge=0)
    readings: List[Union[int, float]] = Field(default_factory=list)
