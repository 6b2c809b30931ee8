"""Trip planning request/response schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from .stations import StationFiltersModel, StationModel


class CoordinateModel(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    label: Optional[str] = Field(default=None, description="Display name; addresses are not geocoded.")


class VehicleProfileModel(BaseModel):
    """Vehicle overrides. Omitted fields fall back to the configured defaults."""

    battery_capacity_kwh: Optional[float] = None
    max_range_km: Optional[float] = None
    efficiency_km_per_kwh: Optional[float] = None
    max_charging_power_kw: Optional[float] = None
    current_soc_pct: Optional[float] = None
    target_soc_pct: Optional[float] = None
    connector_type: Optional[str] = None


class TripPlanRequest(BaseModel):
    start: CoordinateModel
    end: CoordinateModel
    vehicle: Optional[VehicleProfileModel] = None
    stations: Optional[List[StationModel]] = Field(
        default=None,
        description="Station snapshot to plan against. When omitted the station directory is used.",
    )
    search_radius_km: Optional[float] = Field(default=None, gt=0)
    strategy: Optional[Literal["nearest", "cheapest", "fastest", "availability"]] = None
    filters: Optional[StationFiltersModel] = None
    match_connector: bool = Field(
        default=False,
        description="Only consider stations whose connector matches the vehicle connector type.",
    )
    persist: bool = False
    run_label: Optional[str] = Field(default=None, description="Friendly name for persisted outputs.")


class RoutePointModel(BaseModel):
    latitude: float
    longitude: float
    kind: Literal["start", "waypoint", "end"]
    label: Optional[str] = None


class ChargingStopModel(BaseModel):
    station: StationModel
    distance_from_previous_km: float
    arrival_soc_pct: float
    departure_soc_pct: float
    charging_minutes: float
    wait_minutes: float
    energy_kwh: float
    cost: float


class RoutePlanModel(BaseModel):
    total_distance_km: float
    total_drive_minutes: float
    total_charging_minutes: float
    total_wait_minutes: float
    total_minutes: float
    total_cost: float
    final_soc_pct: float
    efficiency_pct: float
    strategy: str
    constraint_violations: dict[str, float]
    stops: List[ChargingStopModel]
    route: List[RoutePointModel]


class PlanningFailureModel(BaseModel):
    code: str
    message: str


class TripPlanResponse(BaseModel):
    status: str
    plan: Optional[RoutePlanModel] = None
    failure: Optional[PlanningFailureModel] = None
    metadata: dict = Field(default_factory=dict)
