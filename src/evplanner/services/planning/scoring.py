"""Pluggable rules for choosing the next charging stop."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

from ...models.domain import Coordinate, VehicleProfile
from .candidates import Candidate


@dataclass(frozen=True, slots=True)
class ScoringContext:
    position: Coordinate
    soc_pct: float
    remaining_km: float
    vehicle: VehicleProfile


class ScoringStrategy(ABC):
    """Contract for candidate scoring. Lower scores win; ties go to the nearer station."""

    name: str = ""

    @abstractmethod
    def score(self, candidate: Candidate, context: ScoringContext) -> float:
        raise NotImplementedError

    def select(self, candidates: Sequence[Candidate], context: ScoringContext) -> Optional[Candidate]:
        if not candidates:
            return None
        return min(candidates, key=lambda candidate: (self.score(candidate, context), candidate.distance_km))


class NearestStation(ScoringStrategy):
    name = "nearest"

    def score(self, candidate: Candidate, context: ScoringContext) -> float:
        return candidate.distance_km


class CheapestStation(ScoringStrategy):
    name = "cheapest"

    def score(self, candidate: Candidate, context: ScoringContext) -> float:
        return candidate.station.price_per_kwh


class FastestCharger(ScoringStrategy):
    """Prefer the highest power the vehicle can actually draw."""

    name = "fastest"

    def score(self, candidate: Candidate, context: ScoringContext) -> float:
        return -min(candidate.station.power_kw, context.vehicle.max_charging_power_kw)


class MostAvailable(ScoringStrategy):
    name = "availability"

    def score(self, candidate: Candidate, context: ScoringContext) -> float:
        station = candidate.station
        if station.total_slots > 0:
            return -station.free_slots / station.total_slots
        return -float(station.free_slots)


def get_strategy(name: str) -> ScoringStrategy:
    match name:
        case "nearest":
            return NearestStation()
        case "cheapest":
            return CheapestStation()
        case "fastest":
            return FastestCharger()
        case "availability":
            return MostAvailable()
        case _:
            raise ValueError(f"Unknown scoring strategy '{name}'.")
