"""Mini README: Abstract routing provider consumed by the detail calculator.

Structure:
    * RoutingProvider - async interface resolving one leg between two
      coordinates for a travel mode.

Concrete providers translate a backend's answer into a ``LegEstimate`` and
signal a missing route with ``NoRouteFound``; transport or protocol trouble
surfaces as ``RoutingProviderError``. Providers are async context managers so
HTTP-backed implementations can release their connection pools.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Optional

from ..configuration import StopwiseSettings, get_settings
from ..logging_utils import get_logger
from ..sequencing.models import Coordinate, LegEstimate, TravelMode

LOGGER = get_logger(__name__)


class RoutingProvider(ABC):
    """Base interface for routing backends."""

    provider_name: str = "generic"

    def __init__(self, *, settings: Optional[StopwiseSettings] = None) -> None:
        self.settings = settings or get_settings()
        LOGGER.debug("Initialising %s routing provider", self.provider_name)

    @abstractmethod
    async def compute_leg(
        self, origin: Coordinate, destination: Coordinate, mode: TravelMode
    ) -> LegEstimate:
        """Return distance and duration of the route from ``origin`` to ``destination``."""

    async def aclose(self) -> None:
        """Release any resources held by the provider."""

    async def __aenter__(self) -> "RoutingProvider":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def metadata(self) -> Dict[str, str]:
        """Return diagnostic metadata for API responses."""

        return {"provider": self.provider_name}
