"""GeoJSON export utilities for trip plans."""

from __future__ import annotations

from typing import Any, Dict, List

from shapely.geometry import LineString, Point, mapping

from ..planning.models import RoutePlan

POINT_COLORS = {
    "start": "#38e000",
    "waypoint": "#e0af00",
    "end": "#e0003e",
}


def route_line(plan: RoutePlan) -> LineString:
    """Straight-line path through start, every stop and end (lon/lat order)."""

    return LineString([(point.longitude, point.latitude) for point in plan.route])


def route_plan_to_geojson(plan: RoutePlan) -> Dict[str, Any]:
    """Convert a route plan to a GeoJSON FeatureCollection.

    The first feature is the route LineString; the rest are Points for the
    start, each charging stop and the destination.
    """
    features: List[Dict[str, Any]] = [
        {
            "type": "Feature",
            "geometry": mapping(route_line(plan)),
            "properties": {
                "kind": "route",
                "total_distance_km": round(plan.total_distance_km, 3),
                "total_minutes": round(plan.total_minutes, 1),
                "total_cost": round(plan.total_cost, 2),
                "stop_count": len(plan.stops),
                "stroke": "#0000c1",
            },
        }
    ]

    stops = iter(plan.stops)
    for sequence, point in enumerate(plan.route):
        properties: Dict[str, Any] = {
            "kind": point.kind,
            "sequence": sequence,
            "label": point.label,
            "marker-color": POINT_COLORS[point.kind],
        }
        if point.kind == "waypoint":
            stop = next(stops)
            properties.update(
                {
                    "station_id": stop.station.id,
                    "arrival_soc_pct": round(stop.arrival_soc_pct, 2),
                    "departure_soc_pct": round(stop.departure_soc_pct, 2),
                    "charging_minutes": round(stop.charging_minutes, 1),
                    "cost": round(stop.cost, 2),
                }
            )
        features.append(
            {
                "type": "Feature",
                "geometry": mapping(Point(point.longitude, point.latitude)),
                "properties": properties,
            }
        )

    return {"type": "FeatureCollection", "features": features}


def route_plan_to_wkt(plan: RoutePlan) -> str:
    return route_line(plan).wkt
