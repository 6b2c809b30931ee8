"""Planning result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ...models.domain import RoutePoint, Station


@dataclass(frozen=True, slots=True)
class ChargingStop:
    station: Station
    distance_from_previous_km: float
    arrival_soc_pct: float
    departure_soc_pct: float
    charging_minutes: float
    wait_minutes: float
    energy_kwh: float
    cost: float


@dataclass(frozen=True, slots=True)
class RoutePlan:
    total_distance_km: float
    total_drive_minutes: float
    total_charging_minutes: float
    total_wait_minutes: float
    total_cost: float
    stops: tuple[ChargingStop, ...]
    final_soc_pct: float
    route: tuple[RoutePoint, ...]
    efficiency_pct: float
    strategy: str = "nearest"
    constraint_violations: dict[str, float] = field(default_factory=dict)

    @property
    def total_minutes(self) -> float:
        return self.total_drive_minutes + self.total_charging_minutes + self.total_wait_minutes

    @property
    def is_direct(self) -> bool:
        return not self.stops


@dataclass(frozen=True, slots=True)
class PlanningFailure:
    code: str
    message: str


@dataclass(frozen=True, slots=True)
class PlanningOutcome:
    """Either a plan or a typed failure, never both."""

    plan: Optional[RoutePlan] = None
    failure: Optional[PlanningFailure] = None

    @property
    def ok(self) -> bool:
        return self.plan is not None

    @property
    def status(self) -> str:
        if self.failure is not None:
            return self.failure.code
        if self.plan is not None and self.plan.is_direct:
            return "direct"
        return "complete"
