"""Command info - summary of ingested tracks."""

from datetime import datetime, timezone
from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from lofigps.core.config import Config, TimeUnit
from lofigps.core.exceptions import GpsParseError
from lofigps.core.logger import is_verbose
from lofigps.core.pipeline import Pipeline
from lofigps.services.track_store import TrackStore

console = Console()


def _format_time(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def track_length_km(store: TrackStore) -> float:
    """Sum of distances between consecutive points."""
    total = 0.0
    previous = None
    for point in store:
        if previous is not None:
            total += previous.distance_to(point)
        previous = point
    return total


def info(
    sources: List[Path] = typer.Argument(
        ...,
        help="Legacy JSON (.json) or GPX (.gpx) files",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    time_unit: TimeUnit = typer.Option(
        TimeUnit.SECONDS,
        "--time-unit",
        help="Unit of the time field in legacy JSON files",
    ),
    stop_on_missing_time: bool = typer.Option(
        False,
        "--stop-on-missing-time",
        help="Drop the rest of a GPX segment after a point without time",
    ),
) -> None:
    """Loads the sources into one store and prints a summary."""
    config = Config(
        sources=sources,
        time_unit=time_unit,
        stop_segment_on_missing_time=stop_on_missing_time,
        verbose=is_verbose(),
    )

    try:
        pipeline = Pipeline(config=config)
        store = pipeline.run()
    except GpsParseError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2)

    table = Table(title="GPS tracks")

    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Files", str(len(pipeline.reports)))
    table.add_row("Points", str(len(store)))
    table.add_row("Overwritten", str(sum(r.overwritten for r in pipeline.reports)))

    skipped = sum(r.skipped for r in pipeline.reports)
    if skipped:
        table.add_row("Skipped (no time)", f"[yellow]{skipped}[/yellow]")

    if len(store):
        first, last = store.first, store.last
        table.add_row("From", _format_time(first.timestamp))
        table.add_row("To", _format_time(last.timestamp))
        table.add_row("Duration", f"{last.timestamp - first.timestamp}s")
        table.add_row("Length", f"{track_length_km(store):.2f} km")
        table.add_row("With bearing", str(sum(1 for p in store if p.bearing is not None)))
        table.add_row("With speed", str(sum(1 for p in store if p.speed is not None)))

    console.print(table)
