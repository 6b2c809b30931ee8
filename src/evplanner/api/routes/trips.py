"""Trip planning endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...data.stations_repository import StationSnapshotError
from ...schemas.trips import TripPlanRequest, TripPlanResponse
from ...services.planning.service import plan_trip_request

router = APIRouter(prefix="/trips", tags=["trips"])


@router.post("/plan", response_model=TripPlanResponse, status_code=status.HTTP_200_OK)
def plan(payload: TripPlanRequest) -> TripPlanResponse:
    """Plan a trip with charging stops.

    Planning failures (no reachable station, invalid vehicle profile, ...) are
    returned as 422 with a ``code`` the client can act on, e.g. by retrying
    with a larger search radius.
    """
    try:
        response = plan_trip_request(payload)
    except StationSnapshotError as exc:
        logging.error(f"Station snapshot unavailable: {exc}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Station directory is unavailable; supply stations in the request.",
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error planning trip: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to plan trip: {str(exc)}",
        ) from exc

    if response.failure is not None:
        raise HTTPException(
            status_code=422,
            detail={
                "status": response.status,
                "code": response.failure.code,
                "message": response.failure.message,
                "metadata": response.metadata,
            },
        )
    return response
