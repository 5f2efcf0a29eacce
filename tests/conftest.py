"""Mini README: Shared fixtures for the Stopwise test-suite.

Structure:
    * RecordingProvider - in-memory routing provider that records calls and
      can fail or block on a chosen leg.
    * la_start / la_apartments - the Los Angeles scenario used across tests.
    * meridian_points - colinear stops due north of the equator origin.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional, Tuple

import pytest

from stopwise.routing_providers import RoutingProvider
from stopwise.sequencing import (
    Coordinate,
    LegEstimate,
    NoRouteFound,
    Point,
    TravelMode,
    haversine_distance,
)


class RecordingProvider(RoutingProvider):
    """Return haversine distance and a fixed duration per leg."""

    provider_name = "recording"

    def __init__(
        self,
        *,
        settings=None,
        duration_seconds: float = 60.0,
        fail_on_call: Optional[int] = None,
        block_on_call: Optional[int] = None,
    ) -> None:
        super().__init__(settings=settings)
        self.duration_seconds = duration_seconds
        self.fail_on_call = fail_on_call
        self.block_on_call = block_on_call
        self.calls: List[Tuple[Coordinate, Coordinate, TravelMode]] = []
        self.blocked = asyncio.Event()
        self.release = asyncio.Event()

    async def compute_leg(self, origin, destination, mode):
        self.calls.append((origin, destination, mode))
        call_number = len(self.calls)
        if call_number == self.fail_on_call:
            raise NoRouteFound(origin, destination, mode.value)
        if call_number == self.block_on_call:
            self.blocked.set()
            await self.release.wait()
        return LegEstimate(
            distance_meters=haversine_distance(origin, destination),
            duration_seconds=self.duration_seconds,
        )


@pytest.fixture
def provider_cls():
    return RecordingProvider


@pytest.fixture
def la_start() -> Coordinate:
    return Coordinate(34.0522, -118.2437)


@pytest.fixture
def la_apartments() -> List[Point]:
    return [
        Point.at(34.1022, -118.3351, point_id="hollywood", name="Hollywood Heights"),
        Point.at(34.0669, -118.4020, point_id="beverly", name="Beverly Hills Plaza"),
        Point.at(34.0094, -118.4959, point_id="santa-monica", name="Santa Monica Beach"),
        Point.at(34.0430, -118.2517, point_id="downtown", name="Downtown Lofts"),
        Point.at(34.1458, -118.1445, point_id="pasadena", name="Pasadena Gardens"),
    ]


@pytest.fixture
def origin() -> Coordinate:
    return Coordinate(0.0, 0.0)


@pytest.fixture
def meridian_points() -> List[Point]:
    """Stops A..D at 0.01 degree steps north of the origin, A closest."""

    return [
        Point.at(0.01 * step, 0.0, point_id=label)
        for step, label in enumerate(["A", "B", "C", "D"], start=1)
    ]
