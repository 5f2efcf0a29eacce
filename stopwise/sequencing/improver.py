"""Mini README: 2-opt refinement of a constructed tour.

Structure:
    * reversal_gain - meters saved by reversing one sub-sequence of a tour.
    * improve - first-improvement 2-opt search bounded by passes and time.

The tour is anchored at a fixed start location and is open ended (there is
no return leg). A move reverses ``tour[i+1 .. j]`` for ``0 <= i < n - 1`` and
``i + 2 <= j < n``; the head ``tour[0]`` therefore never moves and the
``start -> tour[0]`` leg is identical before and after every move. The gain
of a move is computed from the two edges it replaces, which equals the
difference of the full anchored lengths.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import List, Optional, Sequence

from ..logging_utils import get_logger
from .distance import anchored_length, haversine_distance
from .errors import OptimizationCancelled
from .models import Coordinate, Point

LOGGER = get_logger(__name__)

# Floating point noise must not count as an improvement or the search could cycle.
IMPROVEMENT_EPSILON_M = 1e-9


def reversal_gain(route: Sequence[Point], i: int, j: int) -> float:
    """Length saved by reversing ``route[i+1 .. j]``; positive means shorter."""

    left = route[i].coordinate
    first = route[i + 1].coordinate
    last = route[j].coordinate
    before = haversine_distance(left, first)
    after = haversine_distance(left, last)
    if j + 1 < len(route):
        right = route[j + 1].coordinate
        before += haversine_distance(last, right)
        after += haversine_distance(first, right)
    return before - after


def _raise_if_cancelled(cancel_event: Optional[threading.Event]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise OptimizationCancelled("2-opt refinement cancelled")


def improve(
    start: Coordinate,
    tour: Sequence[Point],
    *,
    max_passes: Optional[int] = None,
    time_budget_seconds: Optional[float] = None,
    cancel_event: Optional[threading.Event] = None,
) -> List[Point]:
    """Apply 2-opt moves until a full pass finds nothing to improve.

    The caller's sequence is never mutated; reversals happen on a private
    list which is returned. When ``max_passes`` or ``time_budget_seconds`` runs
    out the current tour is returned as is, since every applied move only ever
    shortened it.
    """

    route = list(tour)
    count = len(route)
    if count <= 3:
        return route

    debug = LOGGER.isEnabledFor(logging.DEBUG)
    initial_length = anchored_length(start, route) if debug else 0.0
    deadline = time.monotonic() + time_budget_seconds if time_budget_seconds else None
    passes = 0
    swaps = 0
    improved = True

    while improved:
        if max_passes is not None and passes >= max_passes:
            LOGGER.warning("2-opt stopped after %s passes without converging", passes)
            break
        _raise_if_cancelled(cancel_event)
        improved = False
        passes += 1
        for i in range(count - 1):
            _raise_if_cancelled(cancel_event)
            if deadline is not None and time.monotonic() > deadline:
                LOGGER.warning(
                    "2-opt time budget of %.2fs exhausted during pass %s", time_budget_seconds, passes
                )
                return route
            for j in range(i + 2, count):
                if reversal_gain(route, i, j) > IMPROVEMENT_EPSILON_M:
                    route[i + 1 : j + 1] = route[i + 1 : j + 1][::-1]
                    improved = True
                    swaps += 1

    if debug:
        LOGGER.debug(
            "2-opt finished: %s passes, %s swaps, %.1fm -> %.1fm",
            passes,
            swaps,
            initial_length,
            anchored_length(start, route),
        )
    return route
