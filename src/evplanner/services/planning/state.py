"""Immutable simulation state threaded through the planning loop."""

from __future__ import annotations

from dataclasses import dataclass, replace

from ...models.domain import Coordinate
from .models import ChargingStop


@dataclass(frozen=True, slots=True)
class SimulationState:
    position: Coordinate
    soc_pct: float
    remaining_km: float
    stops: tuple[ChargingStop, ...] = ()
    total_cost: float = 0.0
    total_charging_minutes: float = 0.0
    total_wait_minutes: float = 0.0
    iteration: int = 0

    @property
    def visited_ids(self) -> frozenset[str]:
        return frozenset(stop.station.id for stop in self.stops)

    def range_km(self, max_range_km: float) -> float:
        return self.soc_pct / 100.0 * max_range_km

    def needs_charge(self, max_range_km: float) -> bool:
        return self.remaining_km > self.range_km(max_range_km)

    def advance(self, stop: ChargingStop) -> "SimulationState":
        """Return the state after driving to ``stop`` and charging there."""

        return replace(
            self,
            position=stop.station.position,
            soc_pct=stop.departure_soc_pct,
            remaining_km=max(0.0, self.remaining_km - stop.distance_from_previous_km),
            stops=self.stops + (stop,),
            total_cost=self.total_cost + stop.cost,
            total_charging_minutes=self.total_charging_minutes + stop.charging_minutes,
            total_wait_minutes=self.total_wait_minutes + stop.wait_minutes,
            iteration=self.iteration + 1,
        )
