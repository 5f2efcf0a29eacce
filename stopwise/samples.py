"""Mini README: Deterministic demo data for previews and smoke runs.

Structure:
    * DEMO_START - central Los Angeles starting location.
    * demo_apartments - five apartments around Los Angeles with stable ids.

Used by ``main_route_service.py optimize --demo`` and the tests so that
examples do not depend on external files.
"""

from __future__ import annotations

from typing import List

from .sequencing.models import Coordinate, Point

DEMO_START = Coordinate(34.0522, -118.2437)


def demo_apartments() -> List[Point]:
    """Return fresh demo points in a fixed order."""

    return [
        Point.at(
            34.1014,
            -118.3350,
            point_id="sunset-heights",
            name="Sunset Heights",
            address="123 Sunset Blvd, Los Angeles, CA 90028",
            notes="Building code: 1234",
        ),
        Point.at(
            34.0618,
            -118.3448,
            point_id="park-view",
            name="Park View Apartments",
            address="456 Park Ave, Los Angeles, CA 90010",
            notes="Gate code: 5678",
        ),
        Point.at(
            34.0430,
            -118.2517,
            point_id="downtown-lofts",
            name="Downtown Lofts",
            address="789 Main St, Los Angeles, CA 90014",
            notes="Parking on level 2",
        ),
        Point.at(
            34.0094,
            -118.4959,
            point_id="beach-plaza",
            name="Beach Plaza",
            address="321 Ocean Ave, Santa Monica, CA 90401",
            notes="Check with concierge",
        ),
        Point.at(
            34.1508,
            -118.4625,
            point_id="valley-gardens",
            name="Valley Gardens",
            address="654 Ventura Blvd, Sherman Oaks, CA 91403",
            notes="Unit 4B",
        ),
    ]
