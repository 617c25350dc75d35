import asyncio

import flexpolyline as fp
import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from conftest import STUTTGART_SPEEDS
from cruisecast.api import routes_files
from cruisecast.main import app, shutdown
from cruisecast.schemas.route import Waypoint
from cruisecast.schemas.telemetry import TelemetryPoint
from cruisecast.services.session import current_session, set_session


@pytest.fixture
def client(session):
    return TestClient(app)


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_get_route(client):
    body = client.get("/api/route").json()
    assert body["segment_count"] == 6
    assert len(body["waypoints"]) == 7
    assert 0.5 < body["distance_km"] < 1.5


def test_set_route_from_coordinates(client, session):
    r = client.post("/api/route", json={
        "name": "two",
        "coordinates": [{"lat": 48.7837, "lng": 9.1829}, {"lat": 48.7785, "lng": 9.1760}],
    })
    assert r.status_code == 200
    assert r.json()["segment_count"] == 1
    assert len(session.profile) == 2


def test_set_route_from_flexible_polyline(client, session, stuttgart):
    encoded = fp.encode(stuttgart.pairs())
    r = client.post("/api/route", json={"polyline": encoded})
    assert r.status_code == 200
    got = [v for w in r.json()["waypoints"] for v in (w["lat"], w["lng"])]
    assert got == pytest.approx([v for pair in stuttgart.pairs() for v in pair])
    assert session.profile.avg_speeds() == STUTTGART_SPEEDS


def test_route_validation(client):
    short = client.post("/api/route", json={"coordinates": [{"lat": 1, "lng": 1}]})
    assert short.status_code == 400
    both = client.post("/api/route", json={"coordinates": [], "polyline": "abc"})
    assert both.status_code == 422


def test_submit_telemetry_recomputes_profile(client):
    points = [
        {"vehicle_id": "v1", "timestamp": 0, "lat": 48.7837, "lng": 9.1829, "speed": 20},
        {"vehicle_id": "v2", "timestamp": 0, "lat": 48.7837, "lng": 9.1829, "speed": 31},
    ]
    body = client.post("/api/telemetry", json={"points": points}).json()
    assert body["segments"][0]["avg_speed"] == 25.5
    assert body["segments"][0]["sample_count"] == 2
    assert all(s["sample_count"] == 0 for s in body["segments"][1:])
    assert client.get("/api/profile").json() == body


def test_telemetry_rejects_non_finite():
    with pytest.raises(ValidationError):
        TelemetryPoint(vehicle_id="x", timestamp=0, lat=float("nan"), lng=9.0, speed=10)
    with pytest.raises(ValidationError):
        TelemetryPoint(vehicle_id="x", timestamp=0, lat=48.0, lng=9.0, speed=float("inf"))


def test_mock_fleet(client):
    body = client.post("/api/telemetry/mock", json={"vehicle_count": 20, "seed": 9}).json()
    assert [s["sample_count"] for s in body["segments"]] == [20] * 7


def test_tick_multiplier_and_reset(client):
    status = client.put("/api/sim/multiplier", json={"value": 100}).json()
    assert status["requested_multiplier"] == 100
    assert status["effective_multiplier"] == 20

    state = client.post("/api/sim/tick", json={"steps": 3}).json()
    assert state["tick"] == 3
    assert state["speed_multiplier"] == 20

    one = client.post("/api/sim/tick").json()
    assert one["tick"] == 4

    reset = client.post("/api/sim/reset").json()
    assert reset["state"]["tick"] == 0
    assert reset["state"]["segment_index"] == 0


def test_tick_stops_at_terminal(client):
    state = client.post("/api/sim/tick", json={"steps": 10000}).json()
    assert state["terminal"]
    assert state["segment_index"] == 6
    again = client.post("/api/sim/tick").json()
    assert again == state


def test_start_stop(session):
    with TestClient(app) as c:
        assert c.post("/api/sim/start").json()["running"] is True
        assert c.post("/api/sim/stop").json()["running"] is False
        assert c.post("/api/sim/stop").json()["running"] is False
    assert not session.running


def test_export_roundtrip(client, tmp_path, monkeypatch):
    monkeypatch.setattr(routes_files, "SEGMENT_LOGS_PATH", tmp_path / "all_segment_logs.json")
    assert client.get("/api/files/segment-logs").status_code == 404

    client.post("/api/sim/tick", json={"steps": 2})
    exported = client.post("/api/export").json()
    assert exported["segment_average_speeds"] == STUTTGART_SPEEDS
    assert len(exported["history"]) == 2
    assert client.get("/api/files/segment-logs").json() == exported


def test_route_rejects_non_finite_coordinates(client, session):
    body = '{"coordinates": [{"lat": NaN, "lng": 9.18}, {"lat": 48.78, "lng": 9.17}]}'
    r = client.post("/api/route", content=body, headers={"content-type": "application/json"})
    assert r.status_code == 422
    assert len(session.route) == 7
    with pytest.raises(ValidationError):
        Waypoint(lat=48.78, lng=float("inf"))


def test_shutdown_without_session_does_not_build_one():
    set_session(None)
    asyncio.run(shutdown())
    assert current_session() is None
