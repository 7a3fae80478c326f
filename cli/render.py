from __future__ import annotations

from typing import Iterable, Sequence

import typer

from models.reports import ProcessAction, ProcessOutcome
from services.protocol import IngestionSummary
from services.registry import SensorRegistry


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, object]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_registry(registry: SensorRegistry, heading: str = "Registered Sensors") -> None:
    echo_heading(heading)
    typer.echo(registry.describe_all())


def render_outcome(outcome: ProcessOutcome) -> None:
    if outcome.action is ProcessAction.empty:
        typer.secho(
            f"  - {outcome.sensor_id}: no readings to process",
            fg=typer.colors.YELLOW,
        )
    elif outcome.action is ProcessAction.removed_min:
        typer.echo(
            f"  - {outcome.sensor_id}: lowest reading ({outcome.value}) removed, "
            f"{outcome.reading_count} left"
        )
    else:
        typer.echo(
            f"  - {outcome.sensor_id}: mean over {outcome.reading_count} reading(s) = {outcome.value}"
        )


def render_processing(passes: Sequence[Sequence[ProcessOutcome]]) -> None:
    for number, outcomes in enumerate(passes, start=1):
        echo_heading(f"Processing Pass {number}")
        if not outcomes:
            typer.echo("No sensors to process.")
            continue
        for outcome in outcomes:
            render_outcome(outcome)


def render_summary(summary: IngestionSummary) -> None:
    echo_heading("Ingestion Summary")
    echo_key_values(
        [
            ("lines", summary.lines),
            ("accepted", summary.accepted),
            ("rejected", summary.rejected),
            ("sensors_created", summary.sensors_created),
        ]
    )
