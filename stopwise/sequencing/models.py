"""Mini README: Value types flowing through the route-sequencing engine.

Structure:
    * TravelMode - enum of transport modes understood by routing providers.
    * Coordinate - validated latitude/longitude pair in degrees.
    * Point - a stop the caller wants visited, with dwell time and metadata.
    * LegEstimate - raw distance/duration answer from a routing provider.
    * Leg - one resolved edge between consecutive stops.
    * StopVisit - scheduled arrival/departure at a stop.
    * RouteResult - final ordered tour with aggregate travel metrics.

All types are frozen dataclasses. Validation happens at construction so bad
coordinates never reach the heuristics; tours hold references to the
caller's ``Point`` objects rather than copies.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import InvalidCoordinate, RoutingProviderError

DEFAULT_DWELL_SECONDS = 900.0


class TravelMode(str, Enum):
    """Transport modes a routing provider can be asked for."""

    WALKING = "walking"
    DRIVING = "driving"

    @classmethod
    def from_str(cls, value: str) -> "TravelMode":
        """Coerce arbitrary casing into a valid travel mode."""

        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported travel mode: {value}") from error


def _coerce_degrees(value: Any, label: str, limit: float) -> float:
    if isinstance(value, bool):
        raise InvalidCoordinate(f"{label} must be a number, got {value!r}")
    try:
        degrees = float(value)
    except (TypeError, ValueError) as error:
        raise InvalidCoordinate(f"{label} must be a number, got {value!r}") from error
    if not math.isfinite(degrees) or not -limit <= degrees <= limit:
        raise InvalidCoordinate(f"{label} {value!r} is outside -{limit:g}..{limit:g}")
    return degrees


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Latitude/longitude in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "latitude", _coerce_degrees(self.latitude, "latitude", 90.0))
        object.__setattr__(self, "longitude", _coerce_degrees(self.longitude, "longitude", 180.0))

    def __str__(self) -> str:
        return f"({self.latitude:.6f}, {self.longitude:.6f})"

    def as_lon_lat(self) -> Tuple[float, float]:
        """Return ``(longitude, latitude)``, the order GeoJSON and OSRM expect."""

        return (self.longitude, self.latitude)


@dataclass(frozen=True, slots=True)
class Point:
    """A stop with identity, position, display metadata and dwell time."""

    coordinate: Coordinate
    point_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    name: str = ""
    address: str = ""
    notes: Optional[str] = None
    dwell_seconds: float = DEFAULT_DWELL_SECONDS

    def __post_init__(self) -> None:
        if not isinstance(self.coordinate, Coordinate):
            raise InvalidCoordinate(f"Point coordinate must be a Coordinate, got {self.coordinate!r}")
        if not self.point_id:
            raise ValueError("Point id must be a non-empty string")
        try:
            dwell = float(self.dwell_seconds)
        except (TypeError, ValueError) as error:
            raise ValueError(
                f"dwell_seconds must be a non-negative number, got {self.dwell_seconds!r}"
            ) from error
        if not math.isfinite(dwell) or dwell < 0:
            raise ValueError(f"dwell_seconds must be a non-negative number, got {self.dwell_seconds!r}")
        object.__setattr__(self, "point_id", str(self.point_id))
        object.__setattr__(self, "dwell_seconds", dwell)

    @classmethod
    def at(cls, latitude: float, longitude: float, **kwargs: Any) -> "Point":
        """Build a point straight from raw latitude/longitude values."""

        return cls(coordinate=Coordinate(latitude, longitude), **kwargs)

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        *,
        default_dwell_seconds: float = DEFAULT_DWELL_SECONDS,
    ) -> "Point":
        """Build a point from the ``{id, name, address, latitude, longitude, ...}`` input shape."""

        if "latitude" not in data or "longitude" not in data:
            raise InvalidCoordinate("Point input requires 'latitude' and 'longitude'")
        kwargs: Dict[str, Any] = {
            "name": str(data.get("name") or ""),
            "address": str(data.get("address") or ""),
            "notes": data.get("notes"),
            "dwell_seconds": (
                default_dwell_seconds
                if data.get("dwell_seconds") is None
                else data["dwell_seconds"]
            ),
        }
        if data.get("id") is not None:
            kwargs["point_id"] = str(data["id"])
        return cls.at(data["latitude"], data["longitude"], **kwargs)

    @property
    def latitude(self) -> float:
        return self.coordinate.latitude

    @property
    def longitude(self) -> float:
        return self.coordinate.longitude

    @property
    def label(self) -> str:
        """Human readable name falling back to the identifier."""

        return self.name or self.point_id

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.point_id,
            "name": self.name,
            "address": self.address,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "notes": self.notes,
            "dwell_seconds": self.dwell_seconds,
        }


@dataclass(frozen=True, slots=True)
class LegEstimate:
    """Distance and duration returned by a routing provider for one leg."""

    distance_meters: float
    duration_seconds: float

    def __post_init__(self) -> None:
        for label in ("distance_meters", "duration_seconds"):
            value = float(getattr(self, label))
            if not math.isfinite(value) or value < 0:
                raise RoutingProviderError(f"Provider returned invalid {label}: {value!r}")
            object.__setattr__(self, label, value)


@dataclass(frozen=True, slots=True)
class Leg:
    """A resolved edge; ``origin_id`` is ``None`` for the start location."""

    origin: Coordinate
    destination: Coordinate
    origin_id: Optional[str]
    destination_id: str
    distance_meters: float
    duration_seconds: float

    def as_dict(self) -> Dict[str, Any]:
        return {
            "origin_id": self.origin_id,
            "destination_id": self.destination_id,
            "origin": {"latitude": self.origin.latitude, "longitude": self.origin.longitude},
            "destination": {
                "latitude": self.destination.latitude,
                "longitude": self.destination.longitude,
            },
            "distance_meters": self.distance_meters,
            "duration_seconds": self.duration_seconds,
        }


@dataclass(frozen=True, slots=True)
class StopVisit:
    """Arrival at one stop of a route, numbered from 1."""

    visit_order: int
    point: Point
    arrival: datetime
    departure: datetime
    distance_from_previous_meters: float
    duration_from_previous_seconds: float

    def as_dict(self) -> Dict[str, Any]:
        return {
            "visit_order": self.visit_order,
            "id": self.point.point_id,
            "name": self.point.name,
            "arrival": self.arrival.isoformat(),
            "departure": self.departure.isoformat(),
            "distance_from_previous_meters": self.distance_from_previous_meters,
            "duration_from_previous_seconds": self.duration_from_previous_seconds,
        }


@dataclass(frozen=True, slots=True)
class RouteResult:
    """Ordered tour with real-world totals; built only when every leg resolved."""

    tour: Tuple[Point, ...]
    total_distance_meters: float
    total_duration_seconds: float
    legs: Tuple[Leg, ...]
    travel_mode: TravelMode = TravelMode.DRIVING

    @classmethod
    def empty(cls, travel_mode: TravelMode = TravelMode.DRIVING) -> "RouteResult":
        """Zero-valued result for an empty tour."""

        return cls(
            tour=(),
            total_distance_meters=0.0,
            total_duration_seconds=0.0,
            legs=(),
            travel_mode=travel_mode,
        )

    @property
    def total_dwell_seconds(self) -> float:
        return sum(point.dwell_seconds for point in self.tour)

    @property
    def total_travel_seconds(self) -> float:
        return sum(leg.duration_seconds for leg in self.legs)

    @property
    def order(self) -> List[str]:
        return [point.point_id for point in self.tour]

    def schedule(self, departure: datetime) -> List[StopVisit]:
        """Project arrival and departure times for each stop.

        The clock starts at ``departure`` from the start location, advances by
        each leg's duration to reach a stop and by the stop's dwell time
        before leaving it.
        """

        visits: List[StopVisit] = []
        clock = departure
        for order, (point, leg) in enumerate(zip(self.tour, self.legs), start=1):
            arrival = clock + timedelta(seconds=leg.duration_seconds)
            leave = arrival + timedelta(seconds=point.dwell_seconds)
            visits.append(
                StopVisit(
                    visit_order=order,
                    point=point,
                    arrival=arrival,
                    departure=leave,
                    distance_from_previous_meters=leg.distance_meters,
                    duration_from_previous_seconds=leg.duration_seconds,
                )
            )
            clock = leave
        return visits

    def as_dict(self) -> Dict[str, Any]:
        """Export the result with serialisable values."""

        return {
            "order": self.order,
            "stops": [point.as_dict() for point in self.tour],
            "travel_mode": self.travel_mode.value,
            "total_distance_meters": self.total_distance_meters,
            "total_duration_seconds": self.total_duration_seconds,
            "total_travel_seconds": self.total_travel_seconds,
            "total_dwell_seconds": self.total_dwell_seconds,
            "legs": [leg.as_dict() for leg in self.legs],
        }
