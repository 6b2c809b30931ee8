"""Trip planning orchestration service."""

from __future__ import annotations

import logging
from dataclasses import asdict

from ...config import settings
from ...data.stations_repository import StationSnapshotError, get_station_snapshot
from ...models.domain import RoutePoint, Station, VehicleProfile
from ...persistence.filesystem import FileStorage
from ...schemas.stations import StationModel
from ...schemas.trips import (
    ChargingStopModel,
    PlanningFailureModel,
    RoutePlanModel,
    RoutePointModel,
    TripPlanRequest,
    TripPlanResponse,
)
from ..export.geojson import route_plan_to_geojson, route_plan_to_wkt
from ..outputs.plan_formatter import route_plan_to_csv, route_plan_to_json
from .candidates import StationFilters
from .models import PlanningOutcome, RoutePlan
from .planner import PlannerOptions, plan_trip


def _build_profile(payload: TripPlanRequest) -> VehicleProfile:
    overrides = payload.vehicle

    def pick(name: str) -> float:
        value = getattr(overrides, name) if overrides else None
        return value if value is not None else getattr(settings, f"default_{name}")

    return VehicleProfile(
        battery_capacity_kwh=pick("battery_capacity_kwh"),
        max_range_km=pick("max_range_km"),
        efficiency_km_per_kwh=pick("efficiency_km_per_kwh"),
        max_charging_power_kw=pick("max_charging_power_kw"),
        current_soc_pct=pick("current_soc_pct"),
        target_soc_pct=pick("target_soc_pct"),
        connector_type=overrides.connector_type if overrides else None,
    )


def _build_filters(payload: TripPlanRequest, vehicle: VehicleProfile) -> StationFilters | None:
    requested = payload.filters
    connector_types = tuple(requested.connector_types) if requested else ()
    if payload.match_connector and vehicle.connector_type and not connector_types:
        connector_types = (vehicle.connector_type,)
    if requested is None and not connector_types:
        return None
    return StationFilters(
        connector_types=connector_types,
        min_power_kw=requested.min_power_kw if requested else 0.0,
        max_price_per_kwh=requested.max_price_per_kwh if requested else None,
        min_rating=requested.min_rating if requested else 0.0,
    )


def _build_options(payload: TripPlanRequest, vehicle: VehicleProfile) -> PlannerOptions:
    base = PlannerOptions()
    return PlannerOptions(
        search_radius_km=payload.search_radius_km
        if payload.search_radius_km is not None
        else base.search_radius_km,
        safety_buffer_pct=base.safety_buffer_pct,
        max_departure_soc_pct=base.max_departure_soc_pct,
        min_charging_minutes=base.min_charging_minutes,
        average_speed_kmh=base.average_speed_kmh,
        max_iterations=base.max_iterations,
        strategy=payload.strategy or base.strategy,
        filters=_build_filters(payload, vehicle),
    )


def _resolve_stations(payload: TripPlanRequest) -> tuple[Station, ...]:
    if payload.stations is not None:
        return tuple(Station(**station.model_dump()) for station in payload.stations)
    try:
        return get_station_snapshot()
    except (FileNotFoundError, ValueError) as exc:
        raise StationSnapshotError(str(exc)) from exc


def station_to_model(station: Station) -> StationModel:
    return StationModel(**asdict(station))


def route_plan_to_model(plan: RoutePlan) -> RoutePlanModel:
    return RoutePlanModel(
        total_distance_km=plan.total_distance_km,
        total_drive_minutes=plan.total_drive_minutes,
        total_charging_minutes=plan.total_charging_minutes,
        total_wait_minutes=plan.total_wait_minutes,
        total_minutes=plan.total_minutes,
        total_cost=plan.total_cost,
        final_soc_pct=plan.final_soc_pct,
        efficiency_pct=plan.efficiency_pct,
        strategy=plan.strategy,
        constraint_violations=dict(plan.constraint_violations),
        stops=[
            ChargingStopModel(
                station=station_to_model(stop.station),
                distance_from_previous_km=stop.distance_from_previous_km,
                arrival_soc_pct=stop.arrival_soc_pct,
                departure_soc_pct=stop.departure_soc_pct,
                charging_minutes=stop.charging_minutes,
                wait_minutes=stop.wait_minutes,
                energy_kwh=stop.energy_kwh,
                cost=stop.cost,
            )
            for stop in plan.stops
        ],
        route=[RoutePointModel(**asdict(point)) for point in plan.route],
    )


def _persist_outputs(plan: RoutePlan, metadata: dict) -> str:
    storage = FileStorage()
    run_dir = storage.make_run_directory(prefix="trip")
    storage.write_json(
        run_dir / "summary.json",
        {
            "metadata": metadata,
            "plan": route_plan_to_json(plan),
            "route_wkt": route_plan_to_wkt(plan),
        },
    )
    storage.write_csv(run_dir / "stops.csv", route_plan_to_csv(plan))
    storage.write_geojson(run_dir / "route.geojson", route_plan_to_geojson(plan))
    logging.info(f"Persisted trip plan outputs to {run_dir}")
    return str(run_dir)


def plan_trip_request(payload: TripPlanRequest) -> TripPlanResponse:
    vehicle = _build_profile(payload)
    options = _build_options(payload, vehicle)
    stations = _resolve_stations(payload)
    start = RoutePoint(payload.start.latitude, payload.start.longitude, "start", payload.start.label)
    end = RoutePoint(payload.end.latitude, payload.end.longitude, "end", payload.end.label)

    outcome: PlanningOutcome = plan_trip(start, end, vehicle, stations, options)

    metadata: dict = {
        "station_count": len(stations),
        "station_source": "request" if payload.stations is not None else "directory",
        "search_radius_km": options.search_radius_km,
        "strategy": options.strategy,
    }
    if payload.run_label:
        metadata["run_label"] = payload.run_label

    if outcome.failure is not None:
        return TripPlanResponse(
            status=outcome.status,
            failure=PlanningFailureModel(code=outcome.failure.code, message=outcome.failure.message),
            metadata=metadata,
        )

    plan = outcome.plan
    metadata["map_overlays"] = {"route": route_plan_to_geojson(plan)}
    if payload.persist:
        try:
            summary = {key: value for key, value in metadata.items() if key != "map_overlays"}
            metadata["output_dir"] = _persist_outputs(plan, summary)
        except OSError as exc:
            logging.warning(f"Failed to persist trip plan outputs: {exc}")
            metadata["persist_error"] = str(exc)

    return TripPlanResponse(status=outcome.status, plan=route_plan_to_model(plan), metadata=metadata)
