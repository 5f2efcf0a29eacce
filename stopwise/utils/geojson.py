"""Mini README: GeoJSON helpers for Stopwise.

Structure:
    * points_from_geojson - validate a Feature/FeatureCollection of Point
      features and turn it into ``Point`` objects.
    * route_to_geojson - FeatureCollection with the route line and one
      numbered feature per stop, ready for any map client.

Kept free of web framework imports so the CLI and tests can use it directly.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

from ..sequencing.models import DEFAULT_DWELL_SECONDS, Coordinate, Point, RouteResult


def _features(geojson: Dict[str, Any]) -> List[Dict[str, Any]]:
    kind = geojson.get("type")
    if kind == "FeatureCollection":
        features = geojson.get("features")
        if not isinstance(features, list):
            raise ValueError("FeatureCollection requires a 'features' list")
        return features
    if kind == "Feature":
        return [geojson]
    raise ValueError("Only Feature or FeatureCollection GeoJSON payloads are supported")


def points_from_geojson(
    payload: str, *, default_dwell_seconds: float = DEFAULT_DWELL_SECONDS
) -> List[Point]:
    """Parse Point features into stops; properties supply id and metadata."""

    try:
        geojson = json.loads(payload)
    except json.JSONDecodeError as error:
        raise ValueError("GeoJSON payload is invalid JSON") from error
    if not isinstance(geojson, dict):
        raise ValueError("GeoJSON payload must be an object")

    points: List[Point] = []
    for index, feature in enumerate(_features(geojson)):
        if not isinstance(feature, dict):
            raise ValueError(f"Feature {index} is not an object")
        geometry = feature.get("geometry") or {}
        if not isinstance(geometry, dict):
            raise ValueError(f"Feature {index} has an invalid geometry")
        if geometry.get("type") != "Point":
            raise ValueError(f"Feature {index} is not a Point geometry")
        coordinates = geometry.get("coordinates")
        if not isinstance(coordinates, list) or len(coordinates) < 2:
            raise ValueError(f"Feature {index} has no usable coordinates")
        properties = dict(feature.get("properties") or {})
        record = {
            "id": properties.get("id", feature.get("id")),
            "name": properties.get("name"),
            "address": properties.get("address"),
            "notes": properties.get("notes"),
            "longitude": coordinates[0],
            "latitude": coordinates[1],
        }
        if properties.get("dwell_seconds") is not None:
            record["dwell_seconds"] = properties["dwell_seconds"]
        points.append(Point.from_mapping(record, default_dwell_seconds=default_dwell_seconds))
    return points


def route_to_geojson(start: Coordinate, result: RouteResult) -> Dict[str, Any]:
    """Return the route as a FeatureCollection (line first, then stops in order)."""

    line = [list(start.as_lon_lat())] + [list(point.coordinate.as_lon_lat()) for point in result.tour]
    features: List[Dict[str, Any]] = [
        {
            "type": "Feature",
            "geometry": {"type": "LineString", "coordinates": line},
            "properties": {
                "kind": "route",
                "travel_mode": result.travel_mode.value,
                "total_distance_meters": result.total_distance_meters,
                "total_duration_seconds": result.total_duration_seconds,
            },
        }
    ]
    for order, (point, leg) in enumerate(zip(result.tour, result.legs), start=1):
        features.append(
            {
                "type": "Feature",
                "id": point.point_id,
                "geometry": {"type": "Point", "coordinates": list(point.coordinate.as_lon_lat())},
                "properties": {
                    "kind": "stop",
                    "visit_order": order,
                    "name": point.name,
                    "address": point.address,
                    "notes": point.notes,
                    "dwell_seconds": point.dwell_seconds,
                    "distance_from_previous_meters": leg.distance_meters,
                    "duration_from_previous_seconds": leg.duration_seconds,
                },
            }
        )
    return {"type": "FeatureCollection", "features": features}
