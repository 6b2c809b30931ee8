"""Serializers for trip plan outputs."""

from __future__ import annotations

import csv
import io
from dataclasses import asdict

from ..planning.models import RoutePlan


def route_plan_to_json(plan: RoutePlan) -> dict:
    return {
        "total_distance_km": plan.total_distance_km,
        "total_drive_minutes": plan.total_drive_minutes,
        "total_charging_minutes": plan.total_charging_minutes,
        "total_wait_minutes": plan.total_wait_minutes,
        "total_minutes": plan.total_minutes,
        "total_cost": plan.total_cost,
        "final_soc_pct": plan.final_soc_pct,
        "efficiency_pct": plan.efficiency_pct,
        "strategy": plan.strategy,
        "constraint_violations": dict(plan.constraint_violations),
        "stops": [asdict(stop) for stop in plan.stops],
        "route": [asdict(point) for point in plan.route],
    }


def route_plan_to_csv(plan: RoutePlan) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "sequence",
        "station_id",
        "station_name",
        "latitude",
        "longitude",
        "distance_from_previous_km",
        "arrival_soc_pct",
        "departure_soc_pct",
        "charging_minutes",
        "wait_minutes",
        "energy_kwh",
        "price_per_kwh",
        "cost",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for sequence, stop in enumerate(plan.stops, start=1):
        writer.writerow(
            {
                "sequence": sequence,
                "station_id": stop.station.id,
                "station_name": stop.station.name or "",
                "latitude": stop.station.latitude,
                "longitude": stop.station.longitude,
                "distance_from_previous_km": round(stop.distance_from_previous_km, 3),
                "arrival_soc_pct": round(stop.arrival_soc_pct, 2),
                "departure_soc_pct": round(stop.departure_soc_pct, 2),
                "charging_minutes": round(stop.charging_minutes, 1),
                "wait_minutes": round(stop.wait_minutes, 1),
                "energy_kwh": round(stop.energy_kwh, 3),
                "price_per_kwh": stop.station.price_per_kwh,
                "cost": round(stop.cost, 2),
            }
        )
    return buffer.getvalue()
