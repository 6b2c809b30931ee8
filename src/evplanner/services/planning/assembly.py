"""Assemble the final route plan from the simulation state."""

from __future__ import annotations

from ...models.domain import RoutePoint, VehicleProfile
from .models import RoutePlan
from .state import SimulationState


def build_route_plan(
    *,
    start: RoutePoint,
    end: RoutePoint,
    vehicle: VehicleProfile,
    total_distance_km: float,
    state: SimulationState,
    average_speed_kmh: float,
    strategy: str,
) -> RoutePlan:
    stop_points = tuple(
        RoutePoint(
            latitude=stop.station.latitude,
            longitude=stop.station.longitude,
            kind="waypoint",
            label=stop.station.name or stop.station.address or stop.station.id,
        )
        for stop in state.stops
    )
    final_soc = max(0.0, state.soc_pct - state.remaining_km / vehicle.max_range_km * 100.0)

    violations: dict[str, float] = {}
    if final_soc < vehicle.target_soc_pct:
        violations["final_soc_below_target"] = round(vehicle.target_soc_pct - final_soc, 3)

    trip_energy_kwh = total_distance_km / vehicle.efficiency_km_per_kwh
    return RoutePlan(
        total_distance_km=total_distance_km,
        total_drive_minutes=total_distance_km / average_speed_kmh * 60.0,
        total_charging_minutes=state.total_charging_minutes,
        total_wait_minutes=state.total_wait_minutes,
        total_cost=state.total_cost,
        stops=state.stops,
        final_soc_pct=final_soc,
        route=(start, *stop_points, end),
        efficiency_pct=trip_energy_kwh / vehicle.battery_capacity_kwh * 100.0,
        strategy=strategy,
        constraint_violations=violations,
    )
