import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from conftest import north_lat
from src.evplanner.main import create_app
from src.evplanner.models.domain import Station
from src.evplanner.persistence.filesystem import FileStorage
from src.evplanner.services.planning import service as trip_service


@pytest.fixture
def api_client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    # keep persisted outputs inside the test directory
    monkeypatch.setattr(trip_service, "FileStorage", lambda: FileStorage(root=tmp_path))
    return TestClient(create_app())


def _station_payload(sid: str, km: float, **overrides) -> dict:
    payload = {
        "id": sid,
        "latitude": north_lat(km),
        "longitude": 0.0,
        "power_kw": 150.0,
        "price_per_kwh": 0.4,
        "free_slots": 3,
        "total_slots": 4,
        "name": f"Station {sid}",
        "connector_type": "CCS",
    }
    payload.update(overrides)
    return payload


def _trip_payload(**overrides) -> dict:
    payload = {
        "start": {"latitude": 0.0, "longitude": 0.0, "label": "Origin"},
        "end": {"latitude": north_lat(500.0), "longitude": 0.0, "label": "Destination"},
        "vehicle": {
            "battery_capacity_kwh": 75.0,
            "max_range_km": 300.0,
            "efficiency_km_per_kwh": 4.0,
            "max_charging_power_kw": 150.0,
            "current_soc_pct": 100.0,
            "target_soc_pct": 20.0,
            "connector_type": "CCS",
        },
        "stations": [_station_payload("LIMIT", 300.0)],
        "search_radius_km": 350.0,
    }
    payload.update(overrides)
    return payload


def test_root_and_health(api_client: TestClient):
    assert api_client.get("/").json()["status"] == "running"
    assert api_client.get("/api/health").json() == {"status": "ok"}


def test_plan_trip_with_one_stop(api_client: TestClient):
    response = api_client.post("/api/trips/plan", json=_trip_payload())

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "complete"
    plan = payload["plan"]
    assert len(plan["stops"]) == 1
    stop = plan["stops"][0]
    assert stop["station"]["id"] == "LIMIT"
    assert 70.0 <= stop["departure_soc_pct"] <= 90.0
    assert plan["total_cost"] > 0
    assert [point["kind"] for point in plan["route"]] == ["start", "waypoint", "end"]
    assert plan["route"][0]["label"] == "Origin"
    assert payload["metadata"]["station_source"] == "request"
    overlay = payload["metadata"]["map_overlays"]["route"]
    assert overlay["type"] == "FeatureCollection"


def test_plan_direct_trip_uses_default_vehicle(api_client: TestClient):
    request = _trip_payload(end={"latitude": north_lat(50.0), "longitude": 0.0}, stations=[], vehicle=None)

    response = api_client.post("/api/trips/plan", json=request)

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "direct"
    assert payload["plan"]["stops"] == []
    assert payload["plan"]["total_cost"] == 0


def test_plan_full_station_is_infeasible(api_client: TestClient):
    request = _trip_payload(stations=[_station_payload("LIMIT", 300.0, free_slots=0)])

    response = api_client.post("/api/trips/plan", json=request)

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["code"] == "infeasible"
    assert detail["status"] == "infeasible"


def test_plan_connector_mismatch_is_infeasible(api_client: TestClient):
    request = _trip_payload(
        stations=[_station_payload("LIMIT", 300.0, connector_type="CHAdeMO")],
        match_connector=True,
    )

    response = api_client.post("/api/trips/plan", json=request)

    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "infeasible"


def test_plan_zero_range_is_invalid_profile(api_client: TestClient):
    request = _trip_payload()
    request["vehicle"]["max_range_km"] = 0.0

    response = api_client.post("/api/trips/plan", json=request)

    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "invalid_profile"


def test_plan_uses_station_directory_when_no_stations_given(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    snapshot = (
        Station(
            id="DIR",
            latitude=north_lat(300.0),
            longitude=0.0,
            power_kw=150.0,
            price_per_kwh=0.5,
            free_slots=1,
            total_slots=2,
        ),
    )
    monkeypatch.setattr(trip_service, "get_station_snapshot", lambda: snapshot)
    request = _trip_payload()
    del request["stations"]

    response = api_client.post("/api/trips/plan", json=request)

    assert response.status_code == 200
    payload = response.json()
    assert payload["metadata"]["station_source"] == "directory"
    assert payload["plan"]["stops"][0]["station"]["id"] == "DIR"


@pytest.mark.parametrize(
    "error",
    [FileNotFoundError("Station file not found"), ValueError("Unsupported station file format '.txt'.")],
)
def test_plan_without_station_directory_is_unavailable(
    api_client: TestClient, monkeypatch: pytest.MonkeyPatch, error: Exception
):
    def missing():
        raise error

    monkeypatch.setattr(trip_service, "get_station_snapshot", missing)
    request = _trip_payload()
    del request["stations"]

    response = api_client.post("/api/trips/plan", json=request)

    assert response.status_code == 503


def test_plan_persists_outputs(api_client: TestClient, tmp_path: Path):
    response = api_client.post("/api/trips/plan", json=_trip_payload(persist=True, run_label="coast run"))

    assert response.status_code == 200
    run_dirs = list((tmp_path / "outputs").iterdir())
    assert len(run_dirs) == 1
    run_dir = run_dirs[0]
    assert Path(response.json()["metadata"]["output_dir"]).name == run_dir.name
    summary = json.loads((run_dir / "summary.json").read_text(encoding="utf-8"))
    assert summary["metadata"]["run_label"] == "coast run"
    assert summary["route_wkt"].startswith("LINESTRING")
    assert (run_dir / "stops.csv").exists()
    assert json.loads((run_dir / "route.geojson").read_text(encoding="utf-8"))["type"] == "FeatureCollection"


def test_list_stations_near_point(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from src.evplanner.api.routes import stations as stations_route

    snapshot = (
        Station(id="NEAR", latitude=north_lat(5.0), longitude=0.0, power_kw=50.0, price_per_kwh=0.3, free_slots=1, total_slots=2),
        Station(id="FULL", latitude=north_lat(2.0), longitude=0.0, power_kw=50.0, price_per_kwh=0.3, free_slots=0, total_slots=2),
        Station(id="FAR", latitude=north_lat(120.0), longitude=0.0, power_kw=50.0, price_per_kwh=0.3, free_slots=1, total_slots=2),
    )
    monkeypatch.setattr(stations_route, "get_station_snapshot", lambda: snapshot)

    everything = api_client.get("/api/stations").json()
    nearby = api_client.get("/api/stations", params={"latitude": 0.0, "longitude": 0.0, "radius_km": 50}).json()

    assert everything["count"] == 3
    assert nearby["count"] == 1
    assert nearby["stations"][0]["id"] == "NEAR"
    assert nearby["stations"][0]["distance_km"] == pytest.approx(5.0, abs=0.01)


def test_list_stations_requires_both_coordinates(api_client: TestClient):
    response = api_client.get("/api/stations", params={"latitude": 1.0})

    assert response.status_code == 400
