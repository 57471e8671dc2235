# tests/test_election_routes.py

"""
Tests for the election endpoints.
"""

import requests
from fastapi.testclient import TestClient
from unittest.mock import Mock, patch

from models.election import ElectionRecord


FUTURE = ElectionRecord(
    title="Prefect Elections",
    isActive=False,
    date="2999-01-01",
    startDate="2999-01-01",
    endDate="2999-01-01",
    startTime="08:00",
    endTime="16:00",
)


def test_evaluate_active_record(client: TestClient):
    response = client.post(
        "/election/status/evaluate",
        json={
            "election": {"isActive": True, "endDate": "2025-05-15", "endTime": "16:00"},
            "now": "2025-05-15T15:59:59Z",
        },
    )
    assert response.status_code == 200
    clock = response.json()["clock"]
    assert clock["status"] == "active"
    assert clock["display"] == "1s"
    assert clock["remaining_seconds"] == 1


def test_evaluate_ready_to_activate(client: TestClient):
    response = client.post(
        "/election/status/evaluate",
        json={
            "election": {"isActive": False, "startDate": "2025-05-15", "startTime": "08:00"},
            "now": "2025-05-15T08:00:01+00:00",
        },
    )
    clock = response.json()["clock"]
    assert clock["status"] == "not-started"
    assert clock["display"] == "Election ready to activate"
    assert clock["remaining_seconds"] is None


def test_evaluate_rejects_malformed_record(client: TestClient):
    response = client.post(
        "/election/status/evaluate",
        json={
            "election": {"isActive": True, "endDate": "2025-13-40", "endTime": "16:00"},
            "now": "2025-05-15T08:00:00Z",
        },
    )
    assert response.status_code == 422
    assert "Invalid election date" in response.json()["detail"]


def test_evaluate_rejects_malformed_now(client: TestClient):
    response = client.post(
        "/election/status/evaluate",
        json={"election": {"isActive": True, "date": "2025-05-15"}, "now": "yesterday"},
    )
    assert response.status_code == 422


def test_status_uses_backend_record(client: TestClient):
    with patch("routers.election.fetch_election_record", return_value=FUTURE):
        response = client.get("/election/status")

    assert response.status_code == 200
    data = response.json()
    assert data["election"]["title"] == "Prefect Elections"
    assert data["clock"]["status"] == "not-started"
    assert data["clock"]["display"].endswith("s")


def test_status_falls_back_when_backend_unreachable(client: TestClient):
    with patch(
        "routers.election.fetch_election_record",
        side_effect=requests.ConnectionError("refused"),
    ):
        response = client.get("/election/status")

    assert response.status_code == 200
    data = response.json()
    assert data["election"]["title"] == "Election"
    assert data["election"]["isActive"] is False
    assert data["election"]["startTime"] == "08:00"
    assert data["election"]["endTime"] == "16:00"
    assert "start_time" not in data["election"]
    assert data["clock"]["status"] == "not-started"


def test_countdown_without_monitor(client: TestClient):
    response = client.get("/election/countdown")
    assert response.status_code == 503


def test_countdown_reads_monitor_snapshot(app, client: TestClient):
    from models.election import MonitorSnapshot

    monitor = Mock()
    monitor.snapshot = MonitorSnapshot(status="active", display="5m 0s")
    app.state.election_monitor = monitor

    response = client.get("/election/countdown")
    assert response.status_code == 200
    assert response.json()["display"] == "5m 0s"
    assert response.json()["status"] == "active"


def test_settings_for_viewer(client: TestClient, auth_headers, viewer_user):
    record = ElectionRecord(
        isActive=True,
        startDate="2025-05-15", startTime="08:00",
        endDate="2025-05-15", endTime="16:00",
    )
    with patch("dependencies.auth.fetch_session_user", return_value=viewer_user), \
         patch("routers.election.fetch_election_record", return_value=record):
        response = client.get("/election/settings", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["starts"] == {"date": "15 May 2025", "time": "8:00 AM"}
    assert data["ends"] == {"date": "15 May 2025", "time": "4:00 PM"}
