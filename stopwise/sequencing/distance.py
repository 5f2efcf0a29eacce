"""Mini README: Great-circle distance used to rank candidate stops.

Structure:
    * haversine_distance - meters between two coordinates on a spherical Earth.
    * anchored_length - start-to-first-stop leg plus consecutive stop legs.

Both helpers are pure and cheap; the constructor and the 2-opt improver call
them in their inner loops, so they avoid logging and object allocation.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:  # pragma: no cover
    from .models import Coordinate, Point

EARTH_MEAN_RADIUS_M = 6_371_008.8


def haversine_distance(a: "Coordinate", b: "Coordinate") -> float:
    """Return the great-circle distance between ``a`` and ``b`` in meters."""

    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)
    hav = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # Rounding can push antipodal inputs just past 1.0.
    hav = min(1.0, max(0.0, hav))
    return 2 * EARTH_MEAN_RADIUS_M * math.asin(math.sqrt(hav))


def anchored_length(start: "Coordinate", tour: Sequence["Point"]) -> float:
    """Total length of ``tour`` including the leg from ``start`` to its head."""

    if not tour:
        return 0.0
    total = haversine_distance(start, tour[0].coordinate)
    for current, following in zip(tour, tour[1:]):
        total += haversine_distance(current.coordinate, following.coordinate)
    return total
