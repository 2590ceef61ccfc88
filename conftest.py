from __future__ import annotations

from datetime import datetime

import pytest

from src.rfid_attendance.rfid_attendance.classrooms.model import Classroom
from src.rfid_attendance.rfid_attendance.common.datetime_utils import FixedClock
from src.rfid_attendance.rfid_attendance.container import build_container
from src.rfid_attendance.rfid_attendance.teachers.model import Teacher

# 2025-06-02 is a Monday
MONDAY = datetime(2025, 6, 2)


@pytest.fixture
def fixed_now() -> datetime:
    return MONDAY.replace(hour=7, minute=50)


@pytest.fixture
def clock(fixed_now) -> FixedClock:
    return FixedClock(fixed_now)


@pytest.fixture
def container(clock):
    """In-memory wiring: teacher T1 (badge B1), rooms C1/C2, Mon 08:00-09:00 Mathematics in C1."""

    c = build_container(backend="memory", grace_minutes=15, clock=clock)
    c.teachers_repo.add(Teacher(teacher_id="T1", name="Maria Santos", badge_id="B1"))
    c.teachers_repo.add(Teacher(teacher_id="T2", name="Jose Reyes", badge_id="B2"))
    c.teachers_repo.add(Teacher(teacher_id="T9", name="Retired", badge_id="B9", is_active=False))
    c.classrooms_repo.add(Classroom(classroom_id="C1", name="Room 101", location="Main Building", capacity=40))
    c.classrooms_repo.add(Classroom(classroom_id="C2", name="Science Lab", location="Science Wing", capacity=30))
    c.schedule_service.create(
        teacher_id="T1",
        classroom_id="C1",
        day="Monday",
        start_time="08:00",
        end_time="09:00",
        subject="Mathematics",
    )
    return c
