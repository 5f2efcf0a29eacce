"""Mini README: Tests for 2-opt refinement.

Checks the short-tour guard, removal of a crossing in a colinear tour,
monotone anchored length on random inputs, idempotence on a local optimum,
ownership of the working copy, pass caps and cooperative cancellation.
"""

from __future__ import annotations

import itertools
import logging
import random
import threading

import pytest

from stopwise.sequencing import (
    Coordinate,
    OptimizationCancelled,
    Point,
    anchored_length,
    construct,
    improve,
)
from stopwise.sequencing import improver
from stopwise.sequencing.improver import reversal_gain


def _random_points(seed: int, count: int):
    rng = random.Random(seed)
    return [
        Point.at(
            34.0522 + rng.uniform(-0.2, 0.2),
            -118.2437 + rng.uniform(-0.3, 0.3),
            point_id=f"p{index}",
        )
        for index in range(count)
    ]


def test_short_tours_are_returned_unchanged(origin, meridian_points) -> None:
    a, b, c, _ = meridian_points
    crossed = [a, c, b]

    improved = improve(origin, crossed)

    assert improved == crossed
    assert improved is not crossed
    assert improve(origin, []) == []


def test_crossing_in_colinear_tour_is_removed(origin, meridian_points) -> None:
    a, b, c, d = meridian_points

    improved = improve(origin, [a, c, b, d])

    assert [point.point_id for point in improved] == ["A", "B", "C", "D"]
    assert anchored_length(origin, improved) < anchored_length(origin, [a, c, b, d])


def test_reversal_gain_matches_full_length_difference(la_start, la_apartments) -> None:
    tour = list(la_apartments)
    reversed_tour = tour[:2] + tour[2:4][::-1] + tour[4:]

    gain = reversal_gain(tour, 1, 3)

    assert gain == pytest.approx(anchored_length(la_start, tour) - anchored_length(la_start, reversed_tour))


@pytest.mark.parametrize("seed", [1, 7, 42, 2024])
def test_improve_never_lengthens_and_keeps_permutation(seed) -> None:
    start = Coordinate(34.0522, -118.2437)
    points = _random_points(seed, 30)
    shuffled = list(points)
    random.Random(seed + 1).shuffle(shuffled)

    for tour in (shuffled, construct(start, points)):
        improved = improve(start, tour)
        assert anchored_length(start, improved) <= anchored_length(start, tour) + 1e-6
        assert sorted(point.point_id for point in improved) == sorted(point.point_id for point in points)
        assert len(improved) == len(points)


def test_improve_is_idempotent_on_local_optimum() -> None:
    start = Coordinate(34.0522, -118.2437)
    points = _random_points(5, 20)
    optimum = improve(start, construct(start, points))

    assert improve(start, optimum) == optimum
    assert improve(start, improve(start, optimum)) == optimum


def test_improve_does_not_mutate_input(la_start, la_apartments) -> None:
    tour = [la_apartments[i] for i in (0, 2, 1, 3, 4)]
    snapshot = list(tour)

    improve(la_start, tour)

    assert tour == snapshot


def test_pass_cap_returns_valid_tour_no_longer_than_input() -> None:
    start = Coordinate(34.0522, -118.2437)
    tour = _random_points(11, 40)

    capped = improve(start, tour, max_passes=1)

    assert len(capped) == len(tour)
    assert anchored_length(start, capped) <= anchored_length(start, tour) + 1e-6


def test_cancel_event_stops_refinement(la_start, la_apartments) -> None:
    cancel_event = threading.Event()
    cancel_event.set()

    with pytest.raises(OptimizationCancelled):
        improve(la_start, la_apartments, cancel_event=cancel_event)


def test_time_budget_returns_current_tour_with_warning(monkeypatch, caplog) -> None:
    start = Coordinate(34.0522, -118.2437)
    tour = _random_points(3, 25)
    clock = itertools.chain([0.0], itertools.repeat(100.0))
    monkeypatch.setattr(improver.time, "monotonic", lambda: next(clock))

    with caplog.at_level(logging.WARNING, logger="stopwise.sequencing.improver"):
        result = improve(start, tour, time_budget_seconds=1.0)

    assert result == tour
    assert result is not tour
    assert "time budget" in caplog.text
