from __future__ import annotations

import pytest

from src.rfid_attendance.rfid_attendance.attendance.validator import GracePeriodValidator
from src.rfid_attendance.rfid_attendance.common.datetime_utils import TimeOfDay
from src.rfid_attendance.rfid_attendance.core.constants import NO_SCHEDULE_REASON
from src.rfid_attendance.rfid_attendance.core.enums import Weekday
from src.rfid_attendance.rfid_attendance.database.memory import InMemoryScheduleRepository
from src.rfid_attendance.rfid_attendance.schedules.model import ScheduleEntry


def entry(sid, start, end, subject, *, active=True):
    return ScheduleEntry(
        schedule_id=sid,
        teacher_id="T1",
        classroom_id="C1",
        day=Weekday.MONDAY,
        start_time=TimeOfDay.parse(start),
        end_time=TimeOfDay.parse(end),
        subject=subject,
        is_active=active,
    )


class ReversedSchedules:
    """Returns entries latest-first to prove the validator does its own ordering."""

    def __init__(self, entries):
        self._entries = entries

    def list_active_for(self, *, teacher_id, classroom_id, day):
        return sorted(self._entries, key=lambda e: e.start_time, reverse=True)


def check(validator, hhmm, *, day=Weekday.MONDAY, classroom="C1"):
    return validator.is_within_schedule("T1", classroom, day, TimeOfDay.parse(hhmm))


@pytest.mark.parametrize(
    "hhmm, valid",
    [("07:44", False), ("07:45", True), ("08:30", True), ("09:15", True), ("09:16", False)],
)
def test_grace_window_boundaries(hhmm, valid):
    validator = GracePeriodValidator(InMemoryScheduleRepository([entry("S1", "08:00", "09:00", "Math")]), grace_minutes=15)

    result = check(validator, hhmm)

    assert result.valid is valid
    if valid:
        assert result.matched_entry.subject == "Math"
    else:
        assert result.matched_entry is None


def test_no_schedule_for_day_or_room():
    validator = GracePeriodValidator(InMemoryScheduleRepository([entry("S1", "08:00", "09:00", "Math")]))

    assert check(validator, "08:00", day=Weekday.TUESDAY).reason == NO_SCHEDULE_REASON
    assert check(validator, "08:00", classroom="C2").reason == NO_SCHEDULE_REASON


def test_inactive_entries_do_not_open_a_window():
    validator = GracePeriodValidator(InMemoryScheduleRepository([entry("S1", "08:00", "09:00", "Math", active=False)]))

    result = check(validator, "08:00")

    assert not result.valid
    assert result.reason == NO_SCHEDULE_REASON


def test_rejection_lists_every_window_of_the_day():
    validator = GracePeriodValidator(
        InMemoryScheduleRepository([entry("S1", "08:00", "09:00", "Math"), entry("S2", "13:00", "14:00", "Science")])
    )

    result = check(validator, "11:00")

    assert not result.valid
    assert result.windows == ["07:45-09:15 (Math)", "12:45-14:15 (Science)"]
    assert "07:45-09:15 (Math)" in result.reason


def test_overlapping_windows_pick_earliest_start():
    entries = [entry("S1", "08:00", "09:00", "Math"), entry("S2", "09:00", "10:00", "Science")]
    validator = GracePeriodValidator(ReversedSchedules(entries), grace_minutes=15)

    assert check(validator, "08:58").matched_entry.schedule_id == "S1"
    assert check(validator, "09:10").matched_entry.schedule_id == "S1"
    assert check(validator, "09:20").matched_entry.schedule_id == "S2"


def test_grace_period_is_configurable():
    repo = InMemoryScheduleRepository([entry("S1", "08:00", "09:00", "Math")])

    assert not check(GracePeriodValidator(repo, grace_minutes=0), "07:59").valid
    assert check(GracePeriodValidator(repo, grace_minutes=30), "07:30").valid
    with pytest.raises(ValueError):
        GracePeriodValidator(repo, grace_minutes=-1)


def test_window_near_midnight_does_not_wrap():
    validator = GracePeriodValidator(InMemoryScheduleRepository([entry("S1", "00:05", "00:30", "Early")]))

    assert check(validator, "00:00").valid
    assert not check(validator, "23:55").valid


def test_window_before_midnight_is_shown_from_start_of_day():
    early = entry("S1", "00:05", "00:30", "Early")
    validator = GracePeriodValidator(InMemoryScheduleRepository([early]))

    assert validator.effective_window(early) == (-10, 45)
    assert validator.describe_window(early) == "00:00-00:45 (Early)"
    assert check(validator, "23:55").windows == ["00:00-00:45 (Early)"]
