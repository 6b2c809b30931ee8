"""Export utilities for map overlays."""

from .geojson import route_plan_to_geojson, route_plan_to_wkt

__all__ = ["route_plan_to_geojson", "route_plan_to_wkt"]
