"""Command query - position estimate at a given time."""

from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from lofigps.core.config import Config, TimeUnit
from lofigps.core.exceptions import GpsParseError, QueryError
from lofigps.core.logger import is_verbose
from lofigps.core.pipeline import Pipeline
from lofigps.services.gpx_loader import to_unix_seconds

console = Console()


def parse_time(value: str) -> int:
    """Accepts Unix seconds or an ISO 8601 time (naive means UTC)."""
    value = value.strip()
    if value.lstrip("-").isdigit():
        return int(value)
    try:
        return to_unix_seconds(datetime.fromisoformat(value.replace("Z", "+00:00")))
    except ValueError:
        raise typer.BadParameter(f"Not a Unix timestamp or ISO 8601 time: {value}")


def query(
    sources: List[Path] = typer.Argument(
        ...,
        help="Legacy JSON (.json) or GPX (.gpx) files",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    at: str = typer.Option(
        ...,
        "--at",
        "-t",
        help="Query time, Unix seconds or ISO 8601",
    ),
    max_gap: Optional[int] = typer.Option(
        None,
        "--max-gap",
        "-g",
        help="Maximum gap between samples to interpolate across (in seconds)",
        min=0,
    ),
    extrapolate: bool = typer.Option(
        False,
        "--extrapolate",
        help="Hold the nearest sample outside the recorded range (needs --max-gap)",
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
    """Prints the recorded or interpolated position at the given time."""
    timestamp = parse_time(at)

    if extrapolate and max_gap is None:
        raise typer.BadParameter("--extrapolate needs --max-gap", param_hint="--extrapolate")

    config = Config(
        sources=sources,
        time_unit=time_unit,
        max_gap=max_gap,
        extrapolate=extrapolate,
        stop_segment_on_missing_time=stop_on_missing_time,
        verbose=is_verbose(),
    )

    try:
        pipeline = Pipeline(config=config)
        store = pipeline.run()
    except GpsParseError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2)

    engine = pipeline.query_engine(store)

    try:
        point = engine.query_interpolated(timestamp)
    except QueryError as e:
        console.print(f"[red]{type(e).__name__}:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    exact = engine.lookup_exact(timestamp) is not None

    table = Table(title=f"Position at {timestamp} ({'recorded' if exact else 'estimated'})")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    for name in ("lat", "lon", "elevation", "accuracy", "vertical_accuracy", "bearing", "speed"):
        value = getattr(point, name)
        table.add_row(name, "-" if value is None else f"{value:.6f}")

    console.print(table)
