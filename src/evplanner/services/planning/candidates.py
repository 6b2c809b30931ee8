"""Candidate station search around a point."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, Iterable, Optional

from ...models.domain import Coordinate, Station
from ..geospatial import distance_km


@dataclass(frozen=True, slots=True)
class Candidate:
    station: Station
    distance_km: float


@dataclass(frozen=True, slots=True)
class StationFilters:
    """Optional station constraints carried over from the advanced station search."""

    connector_types: tuple[str, ...] = ()
    min_power_kw: float = 0.0
    max_price_per_kwh: Optional[float] = None
    min_rating: float = 0.0

    def accepts(self, station: Station) -> bool:
        if self.connector_types:
            wanted = {value.lower() for value in self.connector_types}
            if not station.connector_type or station.connector_type.lower() not in wanted:
                return False
        if station.power_kw < self.min_power_kw:
            return False
        if self.max_price_per_kwh is not None and station.price_per_kwh > self.max_price_per_kwh:
            return False
        if self.min_rating and (station.rating or 0.0) < self.min_rating:
            return False
        return True


def find_reachable(
    point: Coordinate,
    catalog: Iterable[Station],
    max_radius_km: float,
    *,
    max_distance_km: float | None = None,
    exclude_ids: Collection[str] = (),
    filters: StationFilters | None = None,
) -> list[Candidate]:
    """Return stations with a free slot within ``max_radius_km`` of ``point``, nearest first.

    ``max_distance_km`` tightens the radius further (remaining trip distance or
    current range). Stations that cannot deliver power are never returned.
    An empty list means nothing qualifies.
    """

    limit = max_radius_km if max_distance_km is None else min(max_radius_km, max_distance_km)
    candidates: list[Candidate] = []
    for station in catalog:
        if station.free_slots <= 0 or station.power_kw <= 0:
            continue
        if station.id in exclude_ids:
            continue
        if filters is not None and not filters.accepts(station):
            continue
        distance = distance_km(point, station.position)
        if distance > limit:
            continue
        candidates.append(Candidate(station=station, distance_km=distance))
    candidates.sort(key=lambda candidate: candidate.distance_km)
    return candidates
