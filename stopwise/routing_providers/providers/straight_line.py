"""Mini README: Offline routing provider based on great-circle distance.

Structure:
    * StraightLineProvider - estimates road distance as haversine distance
      times a detour factor and travel time from a fixed speed per mode.

Useful for demos, tests and as a fallback when no routing server is
reachable. Legs longer than the per-mode limit are reported as
``NoRouteFound`` (nobody walks across a continent).
"""

from __future__ import annotations

from typing import Dict, Optional

from ...configuration import StopwiseSettings
from ...logging_utils import get_logger
from ...sequencing.distance import haversine_distance
from ...sequencing.errors import NoRouteFound
from ...sequencing.models import Coordinate, LegEstimate, TravelMode
from ..base import RoutingProvider
from ..registry import REGISTRY

LOGGER = get_logger(__name__)

SPEED_METERS_PER_SECOND: Dict[TravelMode, float] = {
    TravelMode.DRIVING: 11.0,
    TravelMode.WALKING: 1.4,
}
MAX_LEG_METERS: Dict[TravelMode, float] = {
    TravelMode.DRIVING: 5_000_000.0,
    TravelMode.WALKING: 1_000_000.0,
}


@REGISTRY.register
class StraightLineProvider(RoutingProvider):
    """Approximate legs without any network access."""

    provider_name = "straight_line"

    def __init__(
        self,
        *,
        settings: Optional[StopwiseSettings] = None,
        detour_factor: Optional[float] = None,
    ) -> None:
        super().__init__(settings=settings)
        self.detour_factor = (
            detour_factor if detour_factor is not None else self.settings.straight_line_detour_factor
        )
        if self.detour_factor < 1.0:
            raise ValueError("detour_factor must be at least 1.0")

    async def compute_leg(
        self, origin: Coordinate, destination: Coordinate, mode: TravelMode
    ) -> LegEstimate:
        direct = haversine_distance(origin, destination)
        if direct > MAX_LEG_METERS[mode]:
            raise NoRouteFound(
                origin, destination, mode.value, reason=f"{direct / 1000:.0f}km exceeds the {mode.value} limit"
            )
        distance = direct * self.detour_factor
        duration = distance / SPEED_METERS_PER_SECOND[mode]
        LOGGER.debug("Straight-line leg %s -> %s: %.0fm %.0fs", origin, destination, distance, duration)
        return LegEstimate(distance_meters=distance, duration_seconds=duration)

    def metadata(self) -> Dict[str, str]:
        return {"provider": self.provider_name, "detour_factor": f"{self.detour_factor:g}"}
