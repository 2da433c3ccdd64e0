import pytest
from fastapi.testclient import TestClient

from server.api import create_app


@pytest.fixture
def client(service):
    return TestClient(create_app(service))


def _post_car(client, agent_id, velocity, x, y=0):
    return client.post("/api/update", json={
        "id": agent_id, "vehicle_type": "CAR", "velocity": velocity, "x": x, "y": y
    })


def test_update_returns_warning_for_reporting_agent(client):
    first = _post_car(client, "A", 20, 0)
    assert first.status_code == 200
    assert first.json() == {"status": "ok"}

    second = _post_car(client, "B", 0, 10)
    assert second.status_code == 200
    assert second.json() == {
        "status": "ok",
        "warning": {"status": "RISK", "with": "A", "distance": 10.0, "safe_distance": 48.57},
    }


def test_update_rejects_invalid_json(client):
    response = client.post("/api/update", content=b"{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert "error" in response.json()


def test_update_rejects_incomplete_report(client):
    response = client.post("/api/update", json={"id": "A", "velocity": 3})
    assert response.status_code == 400
    assert "vehicle_type" in response.json()["error"]
    assert client.get("/api/devices").json()["count"] == 0


def test_devices_lists_tracked_agents(client):
    _post_car(client, "A", 20, 0)
    _post_car(client, "B", 0, 10)

    body = client.get("/api/devices").json()

    assert body["count"] == 2
    devices = {d["id"]: d for d in body["devices"]}
    assert devices["A"]["velocity"] == 20.0
    assert devices["B"]["x"] == 10.0
    assert devices["A"]["timestamp"] == 1000000


def test_warnings_endpoint(client):
    assert client.get("/api/warnings").json() == {"warnings": {}, "risk_count": 0}

    _post_car(client, "A", 20, 0)
    _post_car(client, "B", 0, 10)
    body = client.get("/api/warnings").json()

    assert body["risk_count"] == 2
    assert body["warnings"]["A"]["with"] == "B"
    assert body["warnings"]["B"]["with"] == "A"


def test_mode_endpoint(client):
    response = client.post("/api/mode", json={"system_mode": "outdoor", "control_mode": "adas"})
    assert response.status_code == 200
    assert response.json() == {"system_mode": "OUTDOOR", "control_mode": "ADAS"}

    response = client.post("/api/mode", json={"control_mode": "warp"})
    assert response.json() == {"system_mode": "OUTDOOR", "control_mode": "ADAS"}


def test_mode_endpoint_rejects_non_string_values(client):
    response = client.post("/api/mode", json={"system_mode": 1})
    assert response.status_code == 400
    assert client.get("/api/status").json()["system_mode"] == "INDOOR"


def test_status_endpoint(client):
    _post_car(client, "A", 20, 0)
    _post_car(client, "B", 0, 10)

    assert client.get("/api/status").json() == {
        "server": "running",
        "system_mode": "INDOOR",
        "control_mode": "HUMAN",
        "device_count": 2,
        "active_warnings": 2,
    }


def test_simulate_endpoint(client):
    body = client.post("/api/simulate").json()

    assert body["status"] == "simulated"
    assert body["devices_created"] == 5
    assert body["warnings"] == client.get("/api/warnings").json()["warnings"]


@pytest.mark.parametrize("method", ["post", "delete"])
def test_clear_endpoint(client, method):
    _post_car(client, "A", 20, 0)
    _post_car(client, "B", 0, 10)

    response = getattr(client, method)("/api/clear")

    assert response.json() == {"status": "cleared"}
    assert client.get("/api/devices").json() == {"devices": [], "count": 0}
    assert client.get("/api/warnings").json()["risk_count"] == 0


def test_detection_failure_is_reported_as_server_error(client):
    _post_car(client, "A", 20, 0)
    _post_car(client, "B", 0, 10)

    response = client.post("/api/mode", json={"system_mode": "OUTDOOR"})

    assert response.status_code == 500
    assert "lat" in response.json()["error"]
    assert client.get("/api/status").json()["system_mode"] == "INDOOR"


def test_cors_preflight(client):
    response = client.options("/api/update", headers={
        "Origin": "http://dashboard.local",
        "Access-Control-Request-Method": "POST",
        "Access-Control-Request-Headers": "Content-Type",
    })
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.parametrize("body", [
    b'{"id": "A", "vehicle_type": "CAR", "velocity": 20, "x": NaN, "y": 0}',
    b'{"id": "A", "vehicle_type": "CAR", "velocity": 20, "x": "nan", "y": 0}',
    b'{"id": "A", "vehicle_type": "CAR", "velocity": Infinity, "x": 0, "y": 0}',
    b'{"id": "A", "vehicle_type": "CAR", "velocity": 1e200, "x": 0, "y": 0}',
])
def test_update_rejects_non_finite_and_oversized_numbers(client, body):
    _post_car(client, "B", 0, 10)

    response = client.post("/api/update", content=body, headers={"Content-Type": "application/json"})
    assert response.status_code == 400

    devices = client.get("/api/devices")
    assert devices.status_code == 200
    assert devices.json()["count"] == 1
    assert _post_car(client, "C", 20, 0).status_code == 200
