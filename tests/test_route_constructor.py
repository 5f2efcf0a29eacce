"""Mini README: Tests for nearest-neighbour tour construction.

Validates empty and single-point inputs, the input-order tie-break, the
permutation guarantee and the Los Angeles scenario where the first stop must
be the apartment closest to the start.
"""

from __future__ import annotations

import pytest

from stopwise.sequencing import Point, construct, haversine_distance


def test_empty_input_returns_empty_tour(origin) -> None:
    assert construct(origin, []) == []


def test_single_point_is_returned_as_is(origin) -> None:
    point = Point.at(1.0, 1.0)
    assert construct(origin, [point]) == [point]


def test_ties_go_to_the_earliest_input_point(origin) -> None:
    north = Point.at(0.01, 0.0, point_id="north")
    south = Point.at(-0.01, 0.0, point_id="south")

    assert construct(origin, [south, north])[0] is south
    assert construct(origin, [north, south])[0] is north


def test_construct_returns_permutation_of_references(la_start, la_apartments) -> None:
    tour = construct(la_start, la_apartments)

    assert len(tour) == len(la_apartments)
    assert {point.point_id for point in tour} == {point.point_id for point in la_apartments}
    assert all(any(point is original for original in la_apartments) for point in tour)


def test_first_stop_is_closest_to_start(la_start, la_apartments) -> None:
    closest = min(la_apartments, key=lambda point: haversine_distance(la_start, point.coordinate))

    tour = construct(la_start, la_apartments)

    assert tour[0] is closest
    assert tour[0].point_id == "downtown"


def test_construct_does_not_modify_caller_list(la_start, la_apartments) -> None:
    original = list(la_apartments)
    construct(la_start, la_apartments)
    assert la_apartments == original


def test_duplicate_point_ids_fail_fast(origin) -> None:
    with pytest.raises(ValueError):
        construct(origin, [Point.at(1.0, 1.0, point_id="x"), Point.at(2.0, 2.0, point_id="x")])


def test_colinear_points_are_visited_outward(origin, meridian_points) -> None:
    a, b, c, _ = meridian_points
    assert [point.point_id for point in construct(origin, [a, c, b])] == ["A", "B", "C"]
