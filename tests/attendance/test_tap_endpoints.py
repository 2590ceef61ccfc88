from __future__ import annotations

import pytest

from src.rfid_attendance.rfid_attendance.core.exceptions import RepositoryError
from src.rfid_attendance.rfid_attendance.main import create_app


@pytest.fixture
def client(container):
    app = create_app(settings_module="config.testing", container=container)
    return app.test_client()


def test_tap_in_then_tap_out(client, clock):
    res = client.post("/api/rfid/tap-in", json={"badgeId": "B1", "classroomId": "C1"})
    assert res.status_code == 200
    body = res.get_json()
    assert body["success"] is True
    assert body["teacher"] == "Maria Santos"
    assert body["subject"] == "Mathematics"
    assert body["time"] == "07:50:00"

    clock.advance(minutes=75)
    res = client.post("/api/rfid/tap-out", json={"badgeId": "B1"})
    assert res.status_code == 200
    assert res.get_json()["duration"] == "1h 15m"
    assert res.get_json()["durationMinutes"] == 75

    res = client.post("/api/rfid/tap-out", json={"badgeId": "B1"})
    assert res.status_code == 404
    assert res.get_json()["code"] == "NO_ACTIVE_SESSION"


def test_missing_fields_are_bad_requests(client):
    assert client.post("/api/rfid/tap-in", json={"badgeId": "B1"}).status_code == 400
    assert client.post("/api/rfid/tap-out", json={}).status_code == 400
    assert client.post("/api/rfid/tap-in", data="not json").status_code == 400
    assert client.post("/api/rfid/tap-in", json=["B1", "C1"]).status_code == 400
    assert client.post("/api/rfid/tap-out", json="B1").status_code == 400


def test_domain_failures_are_structured(client, clock, fixed_now):
    res = client.post("/api/rfid/tap-in", json={"badgeId": "NOPE", "classroomId": "C1"})
    assert res.status_code == 404
    assert res.get_json() == {
        "success": False,
        "error": "Invalid RFID or teacher not found",
        "code": "UNKNOWN_BADGE",
        "hint": "scan_again",
    }

    clock.value = fixed_now.replace(hour=7, minute=30)
    res = client.post("/api/rfid/tap-in", json={"badgeId": "B1", "classroomId": "C1"})
    assert res.status_code == 403
    assert res.get_json()["code"] == "OUTSIDE_SCHEDULE"
    assert res.get_json()["windows"] == ["07:45-09:15 (Mathematics)"]

    clock.value = fixed_now
    client.post("/api/rfid/tap-in", json={"badgeId": "B1", "classroomId": "C1"})
    res = client.post("/api/rfid/tap-in", json={"rfidId": "B1", "classroomId": "C1"})
    assert res.status_code == 409
    assert res.get_json()["code"] == "ALREADY_ACTIVE"


def test_repository_failure_asks_for_retry(container, monkeypatch):
    def broken(*args, **kwargs):
        raise RepositoryError("Database unavailable: timeout")

    monkeypatch.setattr(container.attendance_repo, "find_open", broken)
    client = create_app(settings_module="config.testing", container=container).test_client()

    res = client.post("/api/rfid/tap-in", json={"badgeId": "B1", "classroomId": "C1"})

    assert res.status_code == 503
    assert res.get_json()["hint"] == "retry"
    assert res.get_json()["code"] == "REPOSITORY_ERROR"


def test_session_state_and_history(client, fixed_now):
    res = client.get("/api/attendance/state", query_string={"teacherId": "T1", "date": "2025-06-02"})
    assert res.get_json()["state"] == "NO_SESSION"

    client.post("/api/rfid/tap-in", json={"badgeId": "B1", "classroomId": "C1"})
    res = client.get("/api/attendance/state", query_string={"teacherId": "T1"})
    assert res.get_json()["state"] == "ACTIVE_SESSION"

    res = client.get("/api/attendance/history", query_string={"teacherId": "T1"})
    (row,) = res.get_json()["records"]
    assert row["date"] == "2025-06-02"
    assert row["tapOutTime"] is None
    assert row["tapInTime"] == fixed_now.isoformat()

    assert client.get("/api/attendance/state", query_string={"teacherId": "T1", "date": "02/06/2025"}).status_code == 400


@pytest.mark.parametrize("limit", ["-1", "0"])
def test_history_limit_must_be_positive(client, clock, limit):
    client.post("/api/rfid/tap-in", json={"badgeId": "B1", "classroomId": "C1"})
    clock.advance(minutes=30)
    client.post("/api/rfid/tap-out", json={"badgeId": "B1"})
    clock.advance(minutes=5)
    client.post("/api/rfid/tap-in", json={"badgeId": "B1", "classroomId": "C1"})

    res = client.get("/api/attendance/history", query_string={"teacherId": "T1", "limit": limit})
    assert res.status_code == 400
    assert res.get_json()["code"] == "VALIDATION_ERROR"

    res = client.get("/api/attendance/history", query_string={"teacherId": "T1", "limit": "1"})
    assert len(res.get_json()["records"]) == 1
    assert len(client.get("/api/attendance/history", query_string={"teacherId": "T1"}).get_json()["records"]) == 2


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok", "gracePeriodMinutes": 15}
