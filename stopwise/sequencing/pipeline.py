"""Mini README: End-to-end route optimisation pipeline.

Structure:
    * sequence_points - construct then refine a tour (pure, synchronous).
    * optimize_route - sequence in a worker thread, then resolve real legs.
    * RouteOptimizer - configured, stateless facade over the two functions.
    * RouteOptimizationCoordinator - lets a newer request for the same target
      supersede an in-flight one so stale results are never published.

Cancelling ``optimize_route`` while the tour is still being refined sets the
refinement's cancel event; the worker thread stops at its next check and its
tour is discarded. Cancelling during leg resolution cancels the pending
provider call.
"""

from __future__ import annotations

import asyncio
import threading
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

from ..configuration import StopwiseSettings, get_settings
from ..logging_utils import get_logger
from .constructor import construct, ensure_unique_points
from .details import calculate_route_details
from .errors import OptimizationSuperseded
from .improver import improve
from .models import Coordinate, Point, RouteResult, TravelMode

if TYPE_CHECKING:  # pragma: no cover
    from ..routing_providers.base import RoutingProvider

LOGGER = get_logger(__name__)


def sequence_points(
    start: Coordinate,
    points: Iterable[Point],
    *,
    max_passes: Optional[int] = None,
    time_budget_seconds: Optional[float] = None,
    cancel_event: Optional[threading.Event] = None,
) -> List[Point]:
    """Return a nearest-neighbour tour refined by 2-opt."""

    initial = construct(start, points)
    return improve(
        start,
        initial,
        max_passes=max_passes,
        time_budget_seconds=time_budget_seconds,
        cancel_event=cancel_event,
    )


async def optimize_route(
    start: Coordinate,
    points: Iterable[Point],
    provider: "RoutingProvider",
    *,
    mode: TravelMode = TravelMode.DRIVING,
    concurrent_legs: bool = False,
    max_passes: Optional[int] = None,
    time_budget_seconds: Optional[float] = None,
) -> RouteResult:
    """Sequence ``points`` from ``start`` and price the tour with ``provider``."""

    stops = ensure_unique_points(points)
    LOGGER.info("Optimising route over %s points", len(stops))
    cancel_event = threading.Event()
    try:
        tour = await asyncio.to_thread(
            sequence_points,
            start,
            stops,
            max_passes=max_passes,
            time_budget_seconds=time_budget_seconds,
            cancel_event=cancel_event,
        )
    except asyncio.CancelledError:
        cancel_event.set()
        LOGGER.info("Route optimisation cancelled during sequencing")
        raise
    return await calculate_route_details(
        start, tour, provider, mode=mode, concurrent=concurrent_legs
    )


class RouteOptimizer:
    """Bundle a provider with search limits; holds no per-call state."""

    def __init__(
        self,
        provider: "RoutingProvider",
        *,
        mode: TravelMode = TravelMode.DRIVING,
        concurrent_legs: bool = False,
        max_passes: Optional[int] = None,
        time_budget_seconds: Optional[float] = None,
    ) -> None:
        self.provider = provider
        self.mode = mode
        self.concurrent_legs = concurrent_legs
        self.max_passes = max_passes
        self.time_budget_seconds = time_budget_seconds
        LOGGER.debug(
            "Initialised RouteOptimizer provider=%s mode=%s max_passes=%s budget=%s",
            provider.provider_name,
            mode.value,
            max_passes,
            time_budget_seconds,
        )

    @classmethod
    def from_settings(
        cls,
        provider: "RoutingProvider",
        settings: Optional[StopwiseSettings] = None,
        *,
        mode: Optional[TravelMode] = None,
    ) -> "RouteOptimizer":
        """Create an optimizer using the configured defaults."""

        settings = settings or get_settings()
        return cls(
            provider,
            mode=mode or TravelMode.from_str(settings.default_travel_mode),
            concurrent_legs=settings.concurrent_leg_requests,
            max_passes=settings.max_improvement_passes,
            time_budget_seconds=settings.improvement_time_budget_seconds,
        )

    def sequence(self, start: Coordinate, points: Iterable[Point]) -> List[Point]:
        """Visiting order only, without contacting the provider."""

        return sequence_points(
            start,
            points,
            max_passes=self.max_passes,
            time_budget_seconds=self.time_budget_seconds,
        )

    async def optimize(self, start: Coordinate, points: Iterable[Point]) -> RouteResult:
        """Visiting order plus real-world distance and duration."""

        return await optimize_route(
            start,
            points,
            self.provider,
            mode=self.mode,
            concurrent_legs=self.concurrent_legs,
            max_passes=self.max_passes,
            time_budget_seconds=self.time_budget_seconds,
        )


class RouteOptimizationCoordinator:
    """Run at most one optimisation per key, newest request wins."""

    def __init__(self) -> None:
        self._in_flight: Dict[str, "asyncio.Task[RouteResult]"] = {}

    def in_flight(self) -> List[str]:
        """Keys with an optimisation currently running."""

        return sorted(key for key, task in self._in_flight.items() if not task.done())

    async def optimize(
        self,
        key: str,
        optimizer: RouteOptimizer,
        start: Coordinate,
        points: Iterable[Point],
    ) -> RouteResult:
        """Optimise for ``key``, cancelling any older request for the same key.

        Raises ``OptimizationSuperseded`` when a newer request replaces this one
        before it completes.
        """

        stops = list(points)
        previous = self._in_flight.get(key)
        if previous is not None and not previous.done():
            LOGGER.info("Superseding in-flight optimisation for '%s'", key)
            previous.cancel()

        task = asyncio.create_task(optimizer.optimize(start, stops))
        self._in_flight[key] = task
        try:
            return await task
        except asyncio.CancelledError:
            if task.cancelled() and self._in_flight.get(key) is not task:
                raise OptimizationSuperseded(key) from None
            raise
        finally:
            if self._in_flight.get(key) is task:
                del self._in_flight[key]
