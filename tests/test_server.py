from fastapi.testclient import TestClient

from server.app import app

client = TestClient(app)

SMALL_SCENARIO = {
    "elevators": 1,
    "floors": 2,
    "start": "09:00",
    "end": "09:02",
    "day": "2024-01-01",
    "sequences": {"S": {"interval": 5, "start": "09:00", "end": "09:10", "origins": [0], "destinations": [1]}},
}


def test_index_renders_default_table():
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "<th>Elevator 3 (Floor|Total)</th>" in response.text
    assert "<td>09:00</td>" in response.text
    assert "<td>20:00</td>" in response.text


def test_simulate_returns_json_table():
    response = client.post("/simulate", json=SMALL_SCENARIO)
    assert response.status_code == 200
    body = response.json()
    assert body["headers"] == ["Time", "Elevator 1 (Floor|Total)"]
    assert body["rows"] == [["09:00", "0|0"], ["09:01", "1|1"], ["09:02", "1|1"]]
    assert body["dropped_calls"] == 0


def test_simulate_html():
    response = client.post("/simulate/html", json=SMALL_SCENARIO)
    assert response.status_code == 200
    assert "<td>1|1</td>" in response.text


def test_invalid_payload_is_unprocessable():
    response = client.post("/simulate", json={**SMALL_SCENARIO, "start": "9am"})
    assert response.status_code == 422


def test_unknown_policy_is_bad_request():
    response = client.post("/simulate", json={**SMALL_SCENARIO, "policy": "scan"})
    assert response.status_code == 400
    assert "Unknown dispatch policy" in response.json()["detail"]


def test_default_sequences_listing():
    response = client.get("/sequences/default")
    assert response.status_code == 200
    sequences = response.json()
    assert [s["name"] for s in sequences] == ["Sequence 1", "Sequence 2", "Sequence 3", "Sequence 4"]
    assert sequences[3] == {
        "name": "Sequence 4",
        "interval": 4,
        "start": "14:00",
        "end": "15:00",
        "origins": [1, 2, 3],
        "destinations": [0],
    }
