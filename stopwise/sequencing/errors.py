"""Mini README: Typed failures raised by the route-sequencing engine.

Structure:
    * RouteSequencingError - common base for callers that catch everything.
    * InvalidCoordinate - rejected latitude/longitude at construction time.
    * NoRouteFound - a leg could not be resolved by the routing provider.
    * RoutingProviderError - transport or protocol failure inside a provider.
    * OptimizationCancelled - the 2-opt search was told to stop.
    * OptimizationSuperseded - a newer request for the same target took over.

Empty input is deliberately absent: it yields an empty tour or zero result.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .models import Coordinate


class RouteSequencingError(Exception):
    """Base class for every error raised by Stopwise."""


class InvalidCoordinate(RouteSequencingError, ValueError):
    """Latitude or longitude outside the valid range, or not a finite number."""


class NoRouteFound(RouteSequencingError):
    """The routing provider found no route between two coordinates."""

    def __init__(
        self,
        origin: "Coordinate",
        destination: "Coordinate",
        mode: Optional[str] = None,
        *,
        reason: str = "",
    ) -> None:
        self.origin = origin
        self.destination = destination
        self.mode = mode
        self.reason = reason
        message = f"No route found from {origin} to {destination}"
        if mode:
            message += f" ({mode})"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class RoutingProviderError(RouteSequencingError):
    """The routing provider failed for reasons other than a missing route."""


class OptimizationCancelled(RouteSequencingError):
    """Route refinement stopped because its cancel event was set."""


class OptimizationSuperseded(RouteSequencingError):
    """A newer optimisation request for the same key replaced this one."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Optimisation for '{key}' was superseded by a newer request")
