"""Station snapshot endpoints."""

from __future__ import annotations

import logging
from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Query, status

from ...config import settings
from ...data.stations_repository import get_station_snapshot
from ...models.domain import Coordinate
from ...schemas.stations import NearbyStationModel, StationListResponse
from ...services.planning.candidates import StationFilters, find_reachable

router = APIRouter(prefix="/stations", tags=["stations"])


@router.get("", response_model=StationListResponse, status_code=status.HTTP_200_OK)
def list_stations(
    latitude: float | None = Query(default=None, ge=-90, le=90, description="Search origin latitude"),
    longitude: float | None = Query(default=None, ge=-180, le=180, description="Search origin longitude"),
    radius_km: float | None = Query(default=None, gt=0, description="Search radius around the origin"),
    connector_type: list[str] = Query(default=[], description="Accepted connector types"),
    min_power_kw: float = Query(default=0.0, ge=0),
    max_price_per_kwh: float | None = Query(default=None, ge=0),
) -> StationListResponse:
    """List the current station snapshot.

    With an origin, only stations with a free slot inside the radius are
    returned, nearest first.
    """
    if (latitude is None) != (longitude is None):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="latitude and longitude must be supplied together",
        )
    try:
        snapshot = get_station_snapshot()
    except (FileNotFoundError, ValueError) as exc:
        logging.error(f"Station snapshot unavailable: {exc}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Station directory is unavailable: {exc}",
        ) from exc

    if latitude is None:
        stations = [NearbyStationModel(**asdict(station)) for station in snapshot]
        return StationListResponse(count=len(stations), stations=stations, metadata={"source_count": len(snapshot)})

    radius = radius_km or settings.search_radius_km
    filters = StationFilters(
        connector_types=tuple(connector_type),
        min_power_kw=min_power_kw,
        max_price_per_kwh=max_price_per_kwh,
    )
    candidates = find_reachable(Coordinate(latitude, longitude), snapshot, radius, filters=filters)
    stations = [
        NearbyStationModel(**asdict(candidate.station), distance_km=round(candidate.distance_km, 3))
        for candidate in candidates
    ]
    return StationListResponse(
        count=len(stations),
        stations=stations,
        metadata={"source_count": len(snapshot), "radius_km": radius, "origin": [latitude, longitude]},
    )
