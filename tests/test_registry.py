"""Mini README: Tests for the routing provider registry.

Ensures that the built-in providers register on import and instantiation
works as expected, providing a quick regression suite for the plugin system.
"""

import asyncio

import pytest

from stopwise.routing_providers import (
    REGISTRY,
    OSRMProvider,
    RoutingProvider,
    RoutingProviderRegistry,
    StraightLineProvider,
)
from stopwise.sequencing import Coordinate, NoRouteFound, TravelMode, haversine_distance


def test_registry_contains_builtin_providers():
    assert list(REGISTRY.available_providers()) == ["osrm", "straight_line"]
    assert "OSRM" in REGISTRY


def test_registry_instantiates_provider():
    provider = REGISTRY.create("straight_line", detour_factor=1.5)
    assert isinstance(provider, StraightLineProvider)
    assert provider.provider_name == "straight_line"
    assert provider.metadata() == {"provider": "straight_line", "detour_factor": "1.5"}


def test_registry_rejects_unknown_provider():
    with pytest.raises(KeyError):
        REGISTRY.create("teleport")


def test_register_works_as_decorator(provider_cls):
    registry = RoutingProviderRegistry()

    assert registry.register(provider_cls) is provider_cls
    assert isinstance(registry.create("recording"), RoutingProvider)
    assert "osrm" not in registry


def test_osrm_provider_is_registered():
    provider = REGISTRY.create("osrm", base_url="http://localhost:5000/")
    assert isinstance(provider, OSRMProvider)
    assert provider.base_url == "http://localhost:5000"


def test_straight_line_provider_scales_distance_by_detour_factor():
    origin = Coordinate(34.0522, -118.2437)
    destination = Coordinate(34.0430, -118.2517)
    provider = StraightLineProvider(detour_factor=2.0)

    driving = asyncio.run(provider.compute_leg(origin, destination, TravelMode.DRIVING))
    walking = asyncio.run(provider.compute_leg(origin, destination, TravelMode.WALKING))

    assert driving.distance_meters == pytest.approx(2.0 * haversine_distance(origin, destination))
    assert driving.duration_seconds == pytest.approx(driving.distance_meters / 11.0)
    assert walking.duration_seconds > driving.duration_seconds


def test_straight_line_provider_refuses_impossible_walks():
    provider = StraightLineProvider()

    with pytest.raises(NoRouteFound):
        asyncio.run(
            provider.compute_leg(Coordinate(0.0, 0.0), Coordinate(0.0, 90.0), TravelMode.WALKING)
        )


def test_detour_factor_below_one_is_rejected():
    with pytest.raises(ValueError):
        StraightLineProvider(detour_factor=0.5)
