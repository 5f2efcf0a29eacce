"""Mini README: FastAPI service exposing the route-sequencing engine.

Structure:
    * CoordinatePayload / PointPayload - request bodies for locations and stops.
    * SequenceRequest / OptimizeRouteRequest - endpoint payloads.
    * create_application - application factory wiring the routes.

Endpoints:
    * ``GET /providers`` - registered routing providers and the default.
    * ``POST /sequence`` - visiting order only, no provider calls.
    * ``POST /optimize-route`` - order plus real-world legs, totals, an
      optional schedule and GeoJSON. Requests sharing a ``request_key``
      supersede each other so a slow, older answer never overwrites a newer one.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from .. import __version__
from ..configuration import StopwiseSettings, get_settings
from ..logging_utils import get_logger
from ..routing_providers import REGISTRY, RoutingProviderRegistry
from ..sequencing import (
    Coordinate,
    NoRouteFound,
    OptimizationSuperseded,
    Point,
    RouteOptimizationCoordinator,
    RouteOptimizer,
    RoutingProviderError,
    TravelMode,
    anchored_length,
    sequence_points,
)
from ..utils.geojson import route_to_geojson

LOGGER = get_logger(__name__)


class CoordinatePayload(BaseModel):
    latitude: float
    longitude: float

    def to_coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)


class PointPayload(BaseModel):
    id: Optional[str] = None
    name: str = ""
    address: str = ""
    latitude: float
    longitude: float
    notes: Optional[str] = None
    dwell_seconds: Optional[float] = Field(None, ge=0.0)


class SequenceRequest(BaseModel):
    start: CoordinatePayload
    points: List[PointPayload] = Field(default_factory=list)


class OptimizeRouteRequest(SequenceRequest):
    provider: Optional[str] = None
    mode: Optional[TravelMode] = None
    request_key: Optional[str] = Field(
        None, description="Requests with the same key supersede each other."
    )
    departure_time: Optional[datetime] = None
    include_geojson: bool = True


def _to_domain(request: SequenceRequest, settings: StopwiseSettings) -> tuple[Coordinate, List[Point]]:
    """Convert payloads, mapping validation failures to HTTP 422."""

    try:
        start = request.start.to_coordinate()
        points = [
            Point.from_mapping(
                payload.model_dump(exclude_none=True),
                default_dwell_seconds=settings.default_dwell_seconds,
            )
            for payload in request.points
        ]
    except ValueError as error:
        raise HTTPException(status_code=422, detail=str(error)) from error
    ids = [point.point_id for point in points]
    if len(set(ids)) != len(ids):
        raise HTTPException(status_code=422, detail="Point ids must be unique")
    return start, points


def create_application(
    *,
    registry: RoutingProviderRegistry = REGISTRY,
    settings: Optional[StopwiseSettings] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    app = FastAPI(title="Stopwise Route Service", version=__version__)
    coordinator = RouteOptimizationCoordinator()

    @app.get("/providers")
    async def list_providers() -> Dict[str, Any]:
        """Return available routing providers."""

        return {
            "providers": list(registry.available_providers()),
            "default": settings.default_provider,
        }

    @app.post("/sequence")
    async def sequence(request: SequenceRequest) -> Dict[str, Any]:
        """Order stops by straight-line distance without contacting a provider."""

        start, points = _to_domain(request, settings)
        tour = await asyncio.to_thread(
            sequence_points,
            start,
            points,
            max_passes=settings.max_improvement_passes,
            time_budget_seconds=settings.improvement_time_budget_seconds,
        )
        LOGGER.info("Sequenced %s points", len(tour))
        return {
            "order": [point.point_id for point in tour],
            "anchored_length_meters": anchored_length(start, tour),
        }

    @app.post("/optimize-route")
    async def optimize(request: OptimizeRouteRequest) -> Dict[str, Any]:
        """Sequence stops and resolve every leg with a routing provider."""

        start, points = _to_domain(request, settings)
        provider_name = request.provider or settings.default_provider
        try:
            provider = registry.create(provider_name, settings=settings)
        except KeyError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error

        async with provider:
            optimizer = RouteOptimizer.from_settings(provider, settings, mode=request.mode)
            try:
                if request.request_key:
                    result = await coordinator.optimize(request.request_key, optimizer, start, points)
                else:
                    result = await optimizer.optimize(start, points)
            except NoRouteFound as error:
                raise HTTPException(status_code=404, detail=str(error)) from error
            except RoutingProviderError as error:
                raise HTTPException(status_code=502, detail=str(error)) from error
            except OptimizationSuperseded as error:
                raise HTTPException(status_code=409, detail=str(error)) from error

        payload = result.as_dict()
        payload["provider"] = provider.metadata()
        if request.departure_time is not None:
            payload["schedule"] = [visit.as_dict() for visit in result.schedule(request.departure_time)]
        if request.include_geojson:
            payload["geojson"] = route_to_geojson(start, result)
        LOGGER.info(
            "Optimised route with %s stops via %s", len(result.tour), provider.provider_name
        )
        return payload

    return app
