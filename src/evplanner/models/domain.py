"""Domain models for vehicles, charging stations and route points."""

from dataclasses import dataclass
from typing import Literal, Optional

RoutePointKind = Literal["start", "waypoint", "end"]


@dataclass(frozen=True, slots=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class VehicleProfile:
    """Energy model of the vehicle being routed.

    State of charge values are percentages of ``battery_capacity_kwh``.
    ``target_soc_pct`` is the floor the vehicle should still hold on arrival.
    """

    battery_capacity_kwh: float
    max_range_km: float
    efficiency_km_per_kwh: float
    max_charging_power_kw: float
    current_soc_pct: float
    target_soc_pct: float
    connector_type: Optional[str] = None

    @property
    def current_energy_kwh(self) -> float:
        return self.battery_capacity_kwh * self.current_soc_pct / 100.0


@dataclass(frozen=True, slots=True)
class Station:
    """Charging station as seen in one snapshot of the station directory."""

    id: str
    latitude: float
    longitude: float
    power_kw: float
    price_per_kwh: float
    free_slots: int
    total_slots: int
    estimated_wait_minutes: Optional[float] = None
    name: Optional[str] = None
    address: Optional[str] = None
    connector_type: Optional[str] = None
    rating: Optional[float] = None
    status: Optional[str] = None

    @property
    def position(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)


@dataclass(frozen=True, slots=True)
class RoutePoint:
    latitude: float
    longitude: float
    kind: RoutePointKind
    label: Optional[str] = None

    @property
    def position(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)
