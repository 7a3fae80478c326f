from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import serial
import typer

from cli.config import CLIConfig, load_config
from cli.render import render_processing, render_registry, render_summary
from logging_config import configure_logging
from services.demo import seed_demo_registry
from services.ingestor import drain, run_ingestion
from services.protocol import IngestionSummary, LineFramer, LineProtocolParser
from services.registry import SensorRegistry
from sources.replay import ReplayByteSource
from sources.serial_port import SerialByteSource

logger = logging.getLogger(__name__)


@dataclass
class CLIState:
    config: CLIConfig


app = typer.Typer(
    help="Collect temperature and pressure readings from a serial sensor gateway.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


def _report(
    registry: SensorRegistry,
    passes: int,
    summary: Optional[IngestionSummary] = None,
) -> None:
    render_registry(registry)
    typer.echo()
    render_processing([registry.process_all() for _ in range(passes)])
    typer.echo()
    render_registry(registry, heading="Final State")
    if summary is not None:
        typer.echo()
        render_summary(summary)


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Diagnostic log level (defaults to LOG_LEVEL env or INFO).",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(log_level=log_level)
    configure_logging(config.log_level)
    ctx.obj = CLIState(config=config)


@app.command("run")
def run_command(
    ctx: typer.Context,
    port: Optional[str] = typer.Option(
        None, "--port", "-p", help="Serial device (defaults to SERIAL_PORT env or /dev/ttyUSB0)."
    ),
    baudrate: Optional[int] = typer.Option(None, "--baudrate", "-b", help="Serial baud rate."),
    duration: Optional[float] = typer.Option(
        None, "--duration", "-d", help="Seconds to collect readings before processing."
    ),
    poll_interval: Optional[float] = typer.Option(
        None, "--poll-interval", help="Seconds to wait when no byte is available."
    ),
    passes: int = typer.Option(1, "--passes", min=0, help="Processing passes to run."),
    demo_fallback: bool = typer.Option(
        True,
        "--demo-fallback/--no-demo-fallback",
        help="Use built-in demo readings if the serial port cannot be opened.",
    ),
) -> None:
    """Read the serial port for a fixed window, then process every sensor."""
    state = _get_state(ctx)
    config = load_config(
        serial_port=port,
        baudrate=baudrate,
        duration=duration,
        poll_interval=poll_interval,
        log_level=state.config.log_level,
    )

    with SensorRegistry() as registry:
        try:
            source = SerialByteSource(config.serial_port, config.baudrate)
        except serial.SerialException as exc:
            logger.error("Could not open serial port %s: %s", config.serial_port, exc)
            if not demo_fallback:
                typer.secho(
                    f"Unable to open {config.serial_port}.", fg=typer.colors.RED, err=True
                )
                raise typer.Exit(code=1)
            typer.secho("Serial port unavailable; running demo mode.", fg=typer.colors.YELLOW)
            seed_demo_registry(registry)
            _report(registry, passes)
            return

        parser = LineProtocolParser(registry, LineFramer(config.line_capacity))
        typer.echo(
            f"Listening on {config.serial_port} for {config.duration:g}s ..."
        )
        try:
            summary = run_ingestion(
                source,
                parser,
                duration=config.duration,
                poll_interval=config.poll_interval,
            )
        finally:
            source.close()
        _report(registry, passes, summary)


@app.command("replay")
def replay_command(
    ctx: typer.Context,
    file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="Captured serial output."
    ),
    passes: int = typer.Option(1, "--passes", min=0, help="Processing passes to run."),
) -> None:
    """Feed a captured byte stream through the parser, then process every sensor."""
    state = _get_state(ctx)
    with SensorRegistry() as registry:
        parser = LineProtocolParser(registry, LineFramer(state.config.line_capacity))
        summary = drain(ReplayByteSource.from_path(file), parser)
        _report(registry, passes, summary)


@app.command("demo")
def demo_command(
    passes: int = typer.Option(1, "--passes", min=0, help="Processing passes to run."),
) -> None:
    """Process the built-in demo readings."""
    with SensorRegistry() as registry:
        seed_demo_registry(registry)
        _report(registry, passes)
