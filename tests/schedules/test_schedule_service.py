from __future__ import annotations

import pytest

from src.rfid_attendance.rfid_attendance.core.enums import Weekday
from src.rfid_attendance.rfid_attendance.core.exceptions import NotFound, ScheduleConflict, ValidationError


def _math_entry(container):
    (entry,) = container.schedules_repo.list_all(classroom_id="C1", day=Weekday.MONDAY)
    return entry


def test_overlapping_entry_in_same_room_is_rejected(container):
    existing = _math_entry(container)

    with pytest.raises(ScheduleConflict) as exc:
        container.schedule_service.create(
            teacher_id="T2", classroom_id="C1", day="Monday", start_time="08:30", end_time="09:30", subject="Physics"
        )

    assert exc.value.conflicting.schedule_id == existing.schedule_id
    assert len(container.schedules_repo.list_all(classroom_id="C1")) == 1


def test_same_slot_in_other_room_is_accepted(container):
    entry = container.schedule_service.create(
        teacher_id="T2", classroom_id="C2", day="Mon", start_time="08:30", end_time="09:30", subject="Physics"
    )

    assert entry.schedule_id
    assert container.schedules_repo.get_by_id(entry.schedule_id) == entry


def test_back_to_back_entry_is_accepted(container):
    container.schedule_service.create(
        teacher_id="T2", classroom_id="C1", day="Monday", start_time="09:00", end_time="10:00", subject="Physics"
    )
    assert len(container.schedules_repo.list_active_for_classroom_day(classroom_id="C1", day=Weekday.MONDAY)) == 2


@pytest.mark.parametrize(
    "fields",
    [
        {"start_time": "09:00", "end_time": "09:00"},
        {"start_time": "10:00", "end_time": "09:00"},
        {"start_time": "9am", "end_time": "10:00"},
        {"day": "Someday"},
        {"subject": "  "},
        {"teacher_id": "nobody"},
        {"teacher_id": "T9"},
        {"classroom_id": "C404"},
    ],
)
def test_invalid_input_is_rejected(container, fields):
    payload = {
        "teacher_id": "T2",
        "classroom_id": "C2",
        "day": "Tuesday",
        "start_time": "10:00",
        "end_time": "11:00",
        "subject": "Physics",
    }
    payload.update(fields)

    with pytest.raises(ValidationError):
        container.schedule_service.create(**payload)


def test_editing_an_entry_does_not_conflict_with_itself(container):
    existing = _math_entry(container)

    updated = container.schedule_service.update(existing.schedule_id, end_time="09:30", subject="Algebra")

    assert str(updated.end_time) == "09:30"
    assert container.schedules_repo.get_by_id(existing.schedule_id).subject == "Algebra"


def test_editing_into_an_occupied_slot_is_rejected(container):
    other = container.schedule_service.create(
        teacher_id="T2", classroom_id="C1", day="Monday", start_time="10:00", end_time="11:00", subject="Physics"
    )

    with pytest.raises(ScheduleConflict):
        container.schedule_service.update(other.schedule_id, start_time="08:45")

    assert str(container.schedules_repo.get_by_id(other.schedule_id).start_time) == "10:00"


def test_deactivated_entry_frees_the_slot_and_blocks_reactivation(container):
    existing = _math_entry(container)
    container.schedule_service.deactivate(existing.schedule_id)

    replacement = container.schedule_service.create(
        teacher_id="T2", classroom_id="C1", day="Monday", start_time="08:30", end_time="09:30", subject="Physics"
    )

    with pytest.raises(ScheduleConflict) as exc:
        container.schedule_service.reactivate(existing.schedule_id)
    assert exc.value.conflicting.schedule_id == replacement.schedule_id


def test_check_reports_conflicts_without_writing(container):
    candidate = container.schedule_service.build(
        teacher_id="T2", classroom_id="C1", day="Monday", start_time="08:30", end_time="09:30", subject="Physics"
    )

    conflicts = container.schedule_service.check(candidate)

    assert [c.subject for c in conflicts] == ["Mathematics"]
    assert len(container.schedules_repo.list_all()) == 1


def test_unknown_schedule_id_is_not_found(container):
    with pytest.raises(NotFound):
        container.schedule_service.deactivate("missing")


@pytest.mark.parametrize("flag", ["false", 0, None])
def test_active_flag_must_be_a_real_boolean(container, flag):
    with pytest.raises(ValidationError, match="isActive must be a boolean"):
        container.schedule_service.create(
            teacher_id="T2", classroom_id="C2", day="Monday", start_time="10:00", end_time="11:00",
            subject="Physics", is_active=flag,
        )

    assert len(container.schedules_repo.list_all()) == 1
