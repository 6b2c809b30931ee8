import math

import pytest

from src.evplanner.models.domain import RoutePoint, Station, VehicleProfile
from src.evplanner.services.geospatial import EARTH_RADIUS_KM


def north_lat(km: float) -> float:
    """Latitude of the point ``km`` north of the equator on the prime meridian."""
    return math.degrees(km / EARTH_RADIUS_KM)


@pytest.fixture
def one_stop_trip():
    """A 500 km trip on a 300 km vehicle with one charger at the range limit."""
    start = RoutePoint(0.0, 0.0, "start", "Origin")
    end = RoutePoint(north_lat(500.0), 0.0, "end", "Destination")
    vehicle = VehicleProfile(
        battery_capacity_kwh=75.0,
        max_range_km=300.0,
        efficiency_km_per_kwh=4.0,
        max_charging_power_kw=150.0,
        current_soc_pct=100.0,
        target_soc_pct=20.0,
    )
    station = Station(
        id="LIMIT",
        latitude=north_lat(300.0),
        longitude=0.0,
        power_kw=150.0,
        price_per_kwh=0.4,
        free_slots=3,
        total_slots=4,
        name="Range Limit Chargers",
    )
    return start, end, vehicle, station
