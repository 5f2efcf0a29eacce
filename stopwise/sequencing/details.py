"""Mini README: Real-world metrics for a finalised tour.

Structure:
    * build_leg_plan - endpoints of every leg, start leg first.
    * calculate_route_details - resolve legs through a routing provider and
      aggregate distance, travel time and dwell time into a RouteResult.

Legs are resolved one after another by default: the first failing leg
aborts the calculation and no later leg is requested. ``concurrent=True``
issues every leg at once inside a task group instead; any failure cancels
the remaining requests and the whole call still fails. Either way a
RouteResult only exists when every leg resolved.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from ..logging_utils import get_logger
from .models import Coordinate, Leg, LegEstimate, Point, RouteResult, TravelMode

if TYPE_CHECKING:  # pragma: no cover
    from ..routing_providers.base import RoutingProvider

LOGGER = get_logger(__name__)

LegPlan = Tuple[Coordinate, Optional[str], Point]


def build_leg_plan(start: Coordinate, tour: Sequence[Point]) -> List[LegPlan]:
    """Return ``(origin, origin_id, destination_point)`` for each leg in order."""

    plan: List[LegPlan] = []
    origin = start
    origin_id: Optional[str] = None
    for point in tour:
        plan.append((origin, origin_id, point))
        origin = point.coordinate
        origin_id = point.point_id
    return plan


async def _resolve_sequentially(
    plan: Sequence[LegPlan], provider: "RoutingProvider", mode: TravelMode
) -> List[LegEstimate]:
    estimates: List[LegEstimate] = []
    for index, (origin, _, destination) in enumerate(plan):
        LOGGER.debug("Resolving leg %s/%s via %s", index + 1, len(plan), provider.provider_name)
        estimates.append(await provider.compute_leg(origin, destination.coordinate, mode))
    return estimates


async def _resolve_concurrently(
    plan: Sequence[LegPlan], provider: "RoutingProvider", mode: TravelMode
) -> List[LegEstimate]:
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [
                group.create_task(provider.compute_leg(origin, destination.coordinate, mode))
                for origin, _, destination in plan
            ]
    except ExceptionGroup as failures:
        # Surface the leg error itself rather than the group wrapper.
        raise failures.exceptions[0] from None
    return [task.result() for task in tasks]


async def calculate_route_details(
    start: Coordinate,
    tour: Sequence[Point],
    provider: "RoutingProvider",
    *,
    mode: TravelMode = TravelMode.DRIVING,
    concurrent: bool = False,
) -> RouteResult:
    """Resolve every leg of ``tour`` and aggregate the totals."""

    stops = tuple(tour)
    if not stops:
        return RouteResult.empty(mode)

    plan = build_leg_plan(start, stops)
    LOGGER.info(
        "Calculating %s legs with provider '%s' (%s, %s)",
        len(plan),
        provider.provider_name,
        mode.value,
        "concurrent" if concurrent else "sequential",
    )
    if concurrent:
        estimates = await _resolve_concurrently(plan, provider, mode)
    else:
        estimates = await _resolve_sequentially(plan, provider, mode)

    legs = tuple(
        Leg(
            origin=origin,
            destination=destination.coordinate,
            origin_id=origin_id,
            destination_id=destination.point_id,
            distance_meters=estimate.distance_meters,
            duration_seconds=estimate.duration_seconds,
        )
        for (origin, origin_id, destination), estimate in zip(plan, estimates)
    )
    total_distance = sum(leg.distance_meters for leg in legs)
    total_duration = sum(leg.duration_seconds for leg in legs)
    total_duration += sum(point.dwell_seconds for point in stops)
    LOGGER.info(
        "Route resolved: %.0fm, %.0fs including dwell time", total_distance, total_duration
    )
    return RouteResult(
        tour=stops,
        total_distance_meters=total_distance,
        total_duration_seconds=total_duration,
        legs=legs,
        travel_mode=mode,
    )
