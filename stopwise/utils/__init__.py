"""Mini README: Utility helpers for Stopwise.

Currently exports the GeoJSON helpers used by the CLI and the web
interface to read stops and publish computed routes.
"""

from .geojson import points_from_geojson, route_to_geojson

__all__ = ["points_from_geojson", "route_to_geojson"]
