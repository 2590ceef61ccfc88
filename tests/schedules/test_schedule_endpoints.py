from __future__ import annotations

import pytest

from src.rfid_attendance.rfid_attendance.main import create_app


@pytest.fixture
def client(container):
    return create_app(settings_module="config.testing", container=container).test_client()


def _payload(**overrides):
    body = {
        "teacherId": "T2",
        "classroomId": "C1",
        "day": "Mon",
        "startTime": "08:30",
        "endTime": "09:30",
        "subject": "Physics",
    }
    body.update(overrides)
    return body


def test_conflicting_schedule_is_rejected_with_the_conflicting_entry(client):
    res = client.post("/api/schedules", json=_payload())

    assert res.status_code == 409
    body = res.get_json()
    assert body["code"] == "SCHEDULE_CONFLICT"
    assert body["conflict"]["subject"] == "Mathematics"
    assert body["conflict"]["startTime"] == "08:00"


def test_same_slot_in_another_room_is_created(client):
    res = client.post("/api/schedules", json=_payload(classroomId="C2"))

    assert res.status_code == 201
    created = res.get_json()["schedule"]
    assert created["day"] == "Monday"
    assert created["isActive"] is True

    listed = client.get("/api/schedules", query_string={"classroomId": "C2"}).get_json()["schedules"]
    assert [s["id"] for s in listed] == [created["id"]]


def test_invalid_schedule_is_a_bad_request(client):
    res = client.post("/api/schedules", json=_payload(classroomId="C2", endTime="08:00"))
    assert res.status_code == 400
    assert res.get_json()["code"] == "VALIDATION_ERROR"


def test_update_delete_and_restore(client):
    (math,) = client.get("/api/schedules", query_string={"classroomId": "C1", "day": "Monday"}).get_json()["schedules"]

    res = client.put(f"/api/schedules/{math['id']}", json={"endTime": "08:45"})
    assert res.status_code == 200
    assert res.get_json()["schedule"]["endTime"] == "08:45"

    assert client.delete(f"/api/schedules/{math['id']}").status_code == 200
    assert client.post("/api/schedules", json=_payload()).status_code == 201

    res = client.post(f"/api/schedules/{math['id']}/restore")
    assert res.status_code == 409

    res = client.put("/api/schedules/missing", json={"subject": "x"})
    assert res.status_code == 404
    assert res.get_json()["code"] == "NOT_FOUND"
    assert client.delete("/api/schedules/missing").status_code == 404
    assert client.post("/api/schedules/missing/restore").status_code == 404


def test_check_endpoint_does_not_write(client):
    res = client.post("/api/schedules/check", json=_payload())
    assert res.get_json()["conflict"] is True
    assert [c["subject"] for c in res.get_json()["conflicts"]] == ["Mathematics"]

    res = client.post("/api/schedules/check", json=_payload(startTime="09:00", endTime="10:00"))
    assert res.get_json() == {"conflict": False, "conflicts": []}

    assert len(client.get("/api/schedules").get_json()["schedules"]) == 1


def test_inactive_flag_as_string_is_rejected_not_coerced(client):
    res = client.post("/api/schedules", json=_payload(isActive="false"))

    assert res.status_code == 400
    assert res.get_json()["code"] == "VALIDATION_ERROR"
    assert res.get_json()["error"] == "isActive must be a boolean"

    (math,) = client.get("/api/schedules").get_json()["schedules"]
    res = client.put(f"/api/schedules/{math['id']}", json={"isActive": "false"})
    assert res.status_code == 400


def test_inactive_entry_can_share_an_occupied_slot(client):
    res = client.post("/api/schedules", json=_payload(isActive=False))

    assert res.status_code == 201
    assert res.get_json()["schedule"]["isActive"] is False


def test_non_object_bodies_are_bad_requests(client):
    assert client.post("/api/schedules", json=["T2", "C1"]).status_code == 400
    assert client.post("/api/schedules/check", json="Monday").status_code == 400
