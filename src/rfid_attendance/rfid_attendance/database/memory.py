"""In-process repositories.

Used by the `testing` settings (STORAGE_BACKEND=memory) and by the test-suite.
They honour the same contracts as the MySQL repositories, including the
atomic open-session check on AttendanceRecord inserts.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..classrooms.model import Classroom
from ..core.enums import Weekday
from ..core.exceptions import DuplicateOpenSession
from ..schedules.model import ScheduleEntry
from ..teachers.model import Teacher


class InMemoryTeacherRepository:
    def __init__(self, teachers: Iterable[Teacher] = ()):
        self._by_id = {t.teacher_id: t for t in teachers}

    def add(self, teacher: Teacher) -> None:
        self._by_id[teacher.teacher_id] = teacher

    def get_by_id(self, teacher_id: str) -> Optional[Teacher]:
        return self._by_id.get(teacher_id)

    def get_by_badge(self, badge_id: str) -> Optional[Teacher]:
        for t in self._by_id.values():
            if t.badge_id == badge_id:
                return t
        return None


class InMemoryClassroomRepository:
    def __init__(self, classrooms: Iterable[Classroom] = ()):
        self._by_id = {c.classroom_id: c for c in classrooms}

    def add(self, classroom: Classroom) -> None:
        self._by_id[classroom.classroom_id] = classroom

    def get_by_id(self, classroom_id: str) -> Optional[Classroom]:
        return self._by_id.get(classroom_id)

    def list_active(self) -> Sequence[Classroom]:
        return sorted((c for c in self._by_id.values() if c.is_active), key=lambda c: c.name)


class InMemoryScheduleRepository:
    def __init__(self, entries: Iterable[ScheduleEntry] = ()):
        self._by_id: dict[str, ScheduleEntry] = {}
        for e in entries:
            self.create(e)

    def get_by_id(self, schedule_id: str) -> Optional[ScheduleEntry]:
        return self._by_id.get(schedule_id)

    def list_active_for(self, *, teacher_id: str, classroom_id: str, day: Weekday) -> Sequence[ScheduleEntry]:
        return self._select(
            lambda e: e.is_active and e.teacher_id == teacher_id and e.classroom_id == classroom_id and e.day == day
        )

    def list_active_for_classroom_day(self, *, classroom_id: str, day: Weekday) -> Sequence[ScheduleEntry]:
        return self._select(lambda e: e.is_active and e.classroom_id == classroom_id and e.day == day)

    def list_all(
        self,
        *,
        classroom_id: Optional[str] = None,
        day: Optional[Weekday] = None,
        teacher_id: Optional[str] = None,
    ) -> Sequence[ScheduleEntry]:
        days = list(Weekday)
        rows = self._select(
            lambda e: (classroom_id is None or e.classroom_id == classroom_id)
            and (day is None or e.day == day)
            and (teacher_id is None or e.teacher_id == teacher_id)
        )
        return sorted(rows, key=lambda e: (days.index(e.day), e.sort_key()))

    def create(self, entry: ScheduleEntry) -> str:
        schedule_id = entry.schedule_id or str(uuid.uuid4())
        self._by_id[schedule_id] = replace(entry, schedule_id=schedule_id)
        return schedule_id

    def update(self, entry: ScheduleEntry) -> bool:
        if entry.schedule_id not in self._by_id:
            return False
        self._by_id[entry.schedule_id] = entry
        return True

    def set_active(self, *, schedule_id: str, is_active: bool) -> bool:
        entry = self._by_id.get(schedule_id)
        if not entry:
            return False
        self._by_id[schedule_id] = replace(entry, is_active=bool(is_active))
        return True

    def _select(self, predicate) -> list[ScheduleEntry]:
        rows = [e for e in self._by_id.values() if predicate(e)]
        rows.sort(key=ScheduleEntry.sort_key)
        return rows


class InMemoryAttendanceRepository:
    """Attendance ledger guarded by a lock so check-and-insert is atomic."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: dict[str, AttendanceRecord] = {}

    def find_open(self, teacher_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with self._lock:
            return self._open_for(teacher_id, work_date)

    def create_open(self, record: AttendanceRecord) -> str:
        with self._lock:
            if self._open_for(record.teacher_id, record.work_date):
                raise DuplicateOpenSession(record.teacher_id)
            record_id = record.record_id or str(uuid.uuid4())
            self._by_id[record_id] = replace(record, record_id=record_id, tap_out_time=None, duration_minutes=None)
            return record_id

    def close(self, *, record_id: str, tap_out_time: datetime, duration_minutes: int) -> bool:
        with self._lock:
            record = self._by_id.get(record_id)
            if not record or not record.is_open:
                return False
            self._by_id[record_id] = replace(record, tap_out_time=tap_out_time, duration_minutes=int(duration_minutes))
            return True

    def list_for_teacher_and_date(self, teacher_id: str, work_date: date) -> Sequence[AttendanceRecord]:
        with self._lock:
            rows = [r for r in self._by_id.values() if r.teacher_id == teacher_id and r.work_date == work_date]
        rows.sort(key=lambda r: r.tap_in_time)
        return rows

    def get_recent_for_teacher(self, teacher_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with self._lock:
            rows = [r for r in self._by_id.values() if r.teacher_id == teacher_id]
        rows.sort(key=lambda r: r.tap_in_time, reverse=True)
        return rows[: int(limit)]

    def all(self) -> list[AttendanceRecord]:
        with self._lock:
            return list(self._by_id.values())

    def _open_for(self, teacher_id: str, work_date: date) -> Optional[AttendanceRecord]:
        for r in self._by_id.values():
            if r.teacher_id == teacher_id and r.work_date == work_date and r.is_open:
                return r
        return None
