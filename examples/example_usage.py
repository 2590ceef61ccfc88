"""Example: drive the tap engine directly (no Flask, no MySQL).

Controllers are a thin layer; the tap rules live in TapEngine / GracePeriodValidator.
"""

from datetime import datetime

from src.rfid_attendance.rfid_attendance.classrooms.model import Classroom
from src.rfid_attendance.rfid_attendance.common.datetime_utils import FixedClock
from src.rfid_attendance.rfid_attendance.container import build_container
from src.rfid_attendance.rfid_attendance.core.exceptions import TapError
from src.rfid_attendance.rfid_attendance.teachers.model import Teacher


def main():
    clock = FixedClock(datetime(2025, 6, 2, 7, 50))  # a Monday
    container = build_container(backend="memory", grace_minutes=15, clock=clock)
    container.teachers_repo.add(Teacher(teacher_id="T1", name="Maria Santos", badge_id="B1"))
    container.classrooms_repo.add(Classroom(classroom_id="C1", name="Room 101", location="Main Building"))

    container.schedule_service.create(
        teacher_id="T1", classroom_id="C1", day="Mon", start_time="08:00", end_time="09:00", subject="Mathematics"
    )

    print(container.tap_engine.tap_in("B1", "C1").to_payload())
    clock.advance(minutes=75)
    print(container.tap_engine.tap_out("B1").to_payload())

    try:
        container.tap_engine.tap_out("B1")
    except TapError as e:
        print(e.code.value, str(e))


if __name__ == "__main__":
    main()
