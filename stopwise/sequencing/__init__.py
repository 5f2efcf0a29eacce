"""Mini README: Route-sequencing engine.

Takes a start location and a set of points, orders them with a
nearest-neighbour heuristic refined by 2-opt, and prices the resulting tour
leg by leg through a routing provider. ``models`` holds the value types,
``constructor``/``improver`` the heuristics, ``details`` the provider-backed
metrics and ``pipeline`` the async orchestration.
"""

from .constructor import construct
from .details import calculate_route_details
from .distance import anchored_length, haversine_distance
from .errors import (
    InvalidCoordinate,
    NoRouteFound,
    OptimizationCancelled,
    OptimizationSuperseded,
    RouteSequencingError,
    RoutingProviderError,
)
from .improver import improve
from .models import (
    DEFAULT_DWELL_SECONDS,
    Coordinate,
    Leg,
    LegEstimate,
    Point,
    RouteResult,
    StopVisit,
    TravelMode,
)
from .pipeline import (
    RouteOptimizationCoordinator,
    RouteOptimizer,
    optimize_route,
    sequence_points,
)

__all__ = [
    "DEFAULT_DWELL_SECONDS",
    "Coordinate",
    "InvalidCoordinate",
    "Leg",
    "LegEstimate",
    "NoRouteFound",
    "OptimizationCancelled",
    "OptimizationSuperseded",
    "Point",
    "RouteOptimizationCoordinator",
    "RouteOptimizer",
    "RouteResult",
    "RouteSequencingError",
    "RoutingProviderError",
    "StopVisit",
    "TravelMode",
    "anchored_length",
    "calculate_route_details",
    "construct",
    "haversine_distance",
    "improve",
    "optimize_route",
    "sequence_points",
]
