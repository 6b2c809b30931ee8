"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/stations", status_code=status.HTTP_200_OK)
def health_stations() -> dict:
    """Report whether a station snapshot can be loaded and where it comes from."""
    from ...data.stations_repository import get_station_snapshot
    from ...db.supabase import get_supabase_client

    try:
        stations = get_station_snapshot()
    except Exception as exc:
        return {"service": "stations", "healthy": False, "error": str(exc)}
    return {
        "service": "stations",
        "healthy": True,
        "database_configured": get_supabase_client() is not None,
        "station_count": len(stations),
    }
