"""Mini README: Entry point CLI for the Stopwise route service.

Commands:
    * serve - run the FastAPI service with uvicorn.
    * optimize - order stops from a JSON/GeoJSON file (or the demo
      apartments) and print the route with its totals.

Settings come from ``STOPWISE_*`` environment variables; command options
override them for a single run.
"""

from __future__ import annotations

import asyncio
import json
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
import uvicorn

from stopwise.configuration import get_settings
from stopwise.logging_utils import set_log_level
from stopwise.routing_providers import REGISTRY
from stopwise.samples import DEMO_START, demo_apartments
from stopwise.sequencing import (
    Coordinate,
    Point,
    RouteOptimizer,
    RouteResult,
    RouteSequencingError,
    TravelMode,
)
from stopwise.sequencing.constructor import ensure_unique_points
from stopwise.utils.geojson import points_from_geojson, route_to_geojson

cli = typer.Typer(help="Sequence stops into short routes and price them with a routing provider.")


def _load_points(path: Path, default_dwell_seconds: float) -> List[Point]:
    """Read stops from a GeoJSON FeatureCollection or a JSON list of point records."""

    text = path.read_text(encoding="utf-8")
    data = json.loads(text)
    if isinstance(data, dict) and data.get("type") in {"Feature", "FeatureCollection"}:
        return points_from_geojson(text, default_dwell_seconds=default_dwell_seconds)
    if not isinstance(data, list):
        raise ValueError("Point file must be GeoJSON or a JSON list of point records")
    return [Point.from_mapping(record, default_dwell_seconds=default_dwell_seconds) for record in data]


def _print_result(result: RouteResult, departure: Optional[datetime]) -> None:
    visits = result.schedule(departure) if departure else []
    for index, (point, leg) in enumerate(zip(result.tour, result.legs)):
        line = (
            f"{index + 1:>3}. {point.label:<30} "
            f"{leg.distance_meters / 1000:8.2f} km {leg.duration_seconds / 60:7.1f} min"
        )
        if visits:
            line += f"  arrive {visits[index].arrival:%H:%M}"
        typer.echo(line)
    typer.echo(
        f"Total: {result.total_distance_meters / 1000:.2f} km, "
        f"{result.total_duration_seconds / 60:.1f} min "
        f"({result.total_dwell_seconds / 60:.0f} min at stops, {result.travel_mode.value})"
    )


@cli.command()
def serve(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    set_log_level(settings.log_level)

    # 0.0.0.0 is a bind address, not something a browser can open.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Stopwise on {effective_host}:{effective_port}.\n"
        f"API docs at http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "stopwise.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def optimize(
    points_file: Optional[Path] = typer.Argument(
        None, exists=True, dir_okay=False, help="GeoJSON or JSON list of points."
    ),
    demo: bool = typer.Option(False, help="Use the built-in Los Angeles demo apartments."),
    start_lat: Optional[float] = typer.Option(None, help="Start latitude."),
    start_lon: Optional[float] = typer.Option(None, help="Start longitude."),
    provider: Optional[str] = typer.Option(None, help="Routing provider name."),
    mode: Optional[str] = typer.Option(None, help="Travel mode: driving or walking."),
    departure: Optional[datetime] = typer.Option(None, help="Departure time for a schedule."),
    geojson_out: Optional[Path] = typer.Option(None, help="Write the route as GeoJSON here."),
    log_level: Optional[str] = typer.Option(None, help="Override the configured log level."),
) -> None:
    """Sequence stops, resolve every leg and print the route."""

    settings = get_settings()
    set_log_level(log_level or settings.log_level)

    try:
        if demo:
            points = demo_apartments()
            start = DEMO_START
        elif points_file is None:
            raise typer.BadParameter("Provide a points file or pass --demo.")
        else:
            points = _load_points(points_file, settings.default_dwell_seconds)
            start = None
        if start_lat is not None or start_lon is not None:
            if start_lat is None or start_lon is None:
                raise typer.BadParameter("--start-lat and --start-lon must be given together.")
            start = Coordinate(start_lat, start_lon)
        if start is None:
            raise typer.BadParameter("A start location is required (--start-lat/--start-lon).")
        points = ensure_unique_points(points)
        travel_mode = TravelMode.from_str(mode) if mode else None
    except ValueError as error:
        typer.echo(f"Invalid input: {error}", err=True)
        raise typer.Exit(code=2) from error

    async def _run() -> RouteResult:
        async with REGISTRY.create(provider or settings.default_provider, settings=settings) as routing:
            optimizer = RouteOptimizer.from_settings(routing, settings, mode=travel_mode)
            return await optimizer.optimize(start, points)

    try:
        result = asyncio.run(_run())
    except KeyError as error:
        typer.echo(str(error), err=True)
        raise typer.Exit(code=2) from error
    except RouteSequencingError as error:
        typer.echo(f"Route calculation failed: {error}", err=True)
        raise typer.Exit(code=1) from error

    _print_result(result, departure)
    if geojson_out is not None:
        geojson_out.parent.mkdir(parents=True, exist_ok=True)
        geojson_out.write_text(json.dumps(route_to_geojson(start, result), indent=2), encoding="utf-8")
        typer.echo(f"Saved: {geojson_out.resolve()}")


if __name__ == "__main__":
    cli()
