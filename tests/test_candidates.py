from src.evplanner.models.domain import Coordinate, Station
from src.evplanner.services.planning.candidates import StationFilters, find_reachable


def _station(sid: str, lat: float, lon: float, **overrides) -> Station:
    values = dict(
        id=sid,
        latitude=lat,
        longitude=lon,
        power_kw=150.0,
        price_per_kwh=0.4,
        free_slots=2,
        total_slots=4,
        name=f"Station {sid}",
    )
    values.update(overrides)
    return Station(**values)


ORIGIN = Coordinate(21.5, 39.2)


def test_find_reachable_sorts_nearest_first():
    stations = [
        _station("FAR", 21.8, 39.2),
        _station("NEAR", 21.52, 39.2),
        _station("MID", 21.6, 39.2),
    ]

    result = find_reachable(ORIGIN, stations, 50.0)

    assert [candidate.station.id for candidate in result] == ["NEAR", "MID", "FAR"]
    distances = [candidate.distance_km for candidate in result]
    assert distances == sorted(distances)


def test_find_reachable_skips_full_and_distant_stations():
    stations = [
        _station("FULL", 21.51, 39.2, free_slots=0),
        _station("OUTSIDE", 22.5, 39.2),
        _station("OK", 21.55, 39.2),
    ]

    result = find_reachable(ORIGIN, stations, 50.0)

    assert [candidate.station.id for candidate in result] == ["OK"]


def test_find_reachable_empty_catalog_returns_empty_list():
    assert find_reachable(ORIGIN, [], 50.0) == []


def test_find_reachable_tighter_bound_and_exclusions():
    stations = [_station("A", 21.55, 39.2), _station("B", 21.6, 39.2), _station("C", 21.52, 39.2)]

    result = find_reachable(ORIGIN, stations, 50.0, max_distance_km=8.0, exclude_ids={"C"})

    assert [candidate.station.id for candidate in result] == ["A"]


def test_find_reachable_ignores_unpowered_stations():
    stations = [_station("DEAD", 21.51, 39.2, power_kw=0.0)]

    assert find_reachable(ORIGIN, stations, 50.0) == []


def test_filters_connector_power_price_and_rating():
    stations = [
        _station("CCS", 21.51, 39.2, connector_type="CCS", rating=4.5),
        _station("CHADEMO", 21.52, 39.2, connector_type="CHAdeMO", rating=4.8),
        _station("SLOW", 21.53, 39.2, connector_type="CCS", power_kw=22.0, rating=4.0),
        _station("PRICEY", 21.54, 39.2, connector_type="ccs", price_per_kwh=0.9, rating=5.0),
        _station("UNRATED", 21.55, 39.2, connector_type="CCS"),
    ]
    filters = StationFilters(connector_types=("ccs",), min_power_kw=50.0, max_price_per_kwh=0.5, min_rating=4.0)

    result = find_reachable(ORIGIN, stations, 50.0, filters=filters)

    assert [candidate.station.id for candidate in result] == ["CCS"]
