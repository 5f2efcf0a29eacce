"""Mini README: Nearest-neighbour construction of an initial tour.

Structure:
    * ensure_unique_points - reject inputs that reuse a point identifier.
    * construct - greedy tour that always advances to the closest unvisited stop.

Ties are broken by input order so the same input always yields the same
tour.
"""

from __future__ import annotations

from typing import Iterable, List, Set

from ..logging_utils import get_logger
from .distance import haversine_distance
from .models import Coordinate, Point

LOGGER = get_logger(__name__)


def ensure_unique_points(points: Iterable[Point]) -> List[Point]:
    """Materialise ``points`` and fail fast on duplicate identifiers."""

    materialised = list(points)
    seen: Set[str] = set()
    for point in materialised:
        if not isinstance(point, Point):
            raise TypeError(f"Expected Point, got {type(point).__name__}")
        if point.point_id in seen:
            raise ValueError(f"Point '{point.point_id}' appears more than once")
        seen.add(point.point_id)
    return materialised


def construct(start: Coordinate, points: Iterable[Point]) -> List[Point]:
    """Order ``points`` greedily by proximity, starting from ``start``."""

    unvisited = ensure_unique_points(points)
    if len(unvisited) <= 1:
        return unvisited

    tour: List[Point] = []
    current = start
    while unvisited:
        nearest_index = 0
        nearest_distance = haversine_distance(current, unvisited[0].coordinate)
        for index in range(1, len(unvisited)):
            distance = haversine_distance(current, unvisited[index].coordinate)
            if distance < nearest_distance:
                nearest_index = index
                nearest_distance = distance
        nearest = unvisited.pop(nearest_index)
        tour.append(nearest)
        current = nearest.coordinate

    LOGGER.debug("Nearest-neighbour tour built over %s points", len(tour))
    return tour
