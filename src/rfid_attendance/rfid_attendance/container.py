from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.engine import TapEngine
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.reader import AlwaysOnline, ReaderAvailability
from .attendance.repository import AttendanceRepository
from .attendance.validator import GracePeriodValidator
from .classrooms.mysql_classroom_repository import MySQLClassroomRepository
from .classrooms.repository import ClassroomRepository
from .common.datetime_utils import Clock, SystemClock
from .core.constants import DEFAULT_GRACE_PERIOD_MINUTES
from .database.connection import DBConfig, DatabaseConnection
from .database.memory import (
    InMemoryAttendanceRepository,
    InMemoryClassroomRepository,
    InMemoryScheduleRepository,
    InMemoryTeacherRepository,
)
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.service import ScheduleService
from .teachers.mysql_teacher_repository import MySQLTeacherRepository
from .teachers.repository import TeacherRepository


@dataclass(frozen=True)
class Container:
    teachers_repo: TeacherRepository
    classrooms_repo: ClassroomRepository
    schedules_repo: ScheduleRepository
    attendance_repo: AttendanceRepository

    clock: Clock
    validator: GracePeriodValidator
    tap_engine: TapEngine
    schedule_service: ScheduleService


def wire(
    *,
    teachers: TeacherRepository,
    classrooms: ClassroomRepository,
    schedules: ScheduleRepository,
    attendance: AttendanceRepository,
    grace_minutes: int = DEFAULT_GRACE_PERIOD_MINUTES,
    clock: Optional[Clock] = None,
    readers: Optional[ReaderAvailability] = None,
) -> Container:
    clock = clock or SystemClock()
    validator = GracePeriodValidator(schedules, grace_minutes=grace_minutes)
    tap_engine = TapEngine(attendance, teachers, validator, clock=clock, readers=readers or AlwaysOnline())
    schedule_service = ScheduleService(schedules, teachers, classrooms)

    return Container(
        teachers_repo=teachers,
        classrooms_repo=classrooms,
        schedules_repo=schedules,
        attendance_repo=attendance,
        clock=clock,
        validator=validator,
        tap_engine=tap_engine,
        schedule_service=schedule_service,
    )


def build_container(
    *,
    db_config: Optional[dict] = None,
    backend: str = "mysql",
    grace_minutes: int = DEFAULT_GRACE_PERIOD_MINUTES,
    timezone: Optional[str] = None,
    clock: Optional[Clock] = None,
) -> Container:
    clock = clock or SystemClock(timezone)

    if backend == "memory":
        return wire(
            teachers=InMemoryTeacherRepository(),
            classrooms=InMemoryClassroomRepository(),
            schedules=InMemoryScheduleRepository(),
            attendance=InMemoryAttendanceRepository(),
            grace_minutes=grace_minutes,
            clock=clock,
        )

    if backend != "mysql":
        raise ValueError(f"Unknown storage backend: {backend!r}")

    conn = DatabaseConnection(DBConfig.from_mapping(db_config or {}))

    return wire(
        teachers=MySQLTeacherRepository(conn),
        classrooms=MySQLClassroomRepository(conn),
        schedules=MySQLScheduleRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        grace_minutes=grace_minutes,
        clock=clock,
    )
