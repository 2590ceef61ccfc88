from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..core.enums import Weekday
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import ScheduleEntry
from .repository import ScheduleRepository

_COLUMNS = "schedule_id, teacher_id, classroom_id, day, start_time, end_time, subject, is_active"


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, schedule_id: str) -> Optional[ScheduleEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM schedules WHERE schedule_id=%s", (schedule_id,))
            r = fetchone(cur)
            return self._to_entry(r) if r else None

    def list_active_for(self, *, teacher_id: str, classroom_id: str, day: Weekday) -> Sequence[ScheduleEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM schedules
                WHERE teacher_id=%s AND classroom_id=%s AND day=%s AND is_active=1
                ORDER BY start_time ASC, end_time ASC, schedule_id ASC
                """,
                (teacher_id, classroom_id, day.value),
            )
            return [self._to_entry(r) for r in fetchall(cur)]

    def list_active_for_classroom_day(self, *, classroom_id: str, day: Weekday) -> Sequence[ScheduleEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM schedules
                WHERE classroom_id=%s AND day=%s AND is_active=1
                ORDER BY start_time ASC, end_time ASC, schedule_id ASC
                """,
                (classroom_id, day.value),
            )
            return [self._to_entry(r) for r in fetchall(cur)]

    def list_all(
        self,
        *,
        classroom_id: Optional[str] = None,
        day: Optional[Weekday] = None,
        teacher_id: Optional[str] = None,
    ) -> Sequence[ScheduleEntry]:
        clauses = ["1=1"]
        params: list[object] = []
        if classroom_id is not None:
            clauses.append("classroom_id=%s")
            params.append(classroom_id)
        if day is not None:
            clauses.append("day=%s")
            params.append(day.value)
        if teacher_id is not None:
            clauses.append("teacher_id=%s")
            params.append(teacher_id)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM schedules
                WHERE {where}
                ORDER BY FIELD(day, 'Monday','Tuesday','Wednesday','Thursday','Friday','Saturday','Sunday'),
                         start_time ASC, schedule_id ASC
                """,
                tuple(params),
            )
            return [self._to_entry(r) for r in fetchall(cur)]

    def create(self, entry: ScheduleEntry) -> str:
        schedule_id = entry.schedule_id or str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO schedules(schedule_id, teacher_id, classroom_id, day, start_time, end_time, subject, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    schedule_id,
                    entry.teacher_id,
                    entry.classroom_id,
                    entry.day.value,
                    entry.start_time.to_time(),
                    entry.end_time.to_time(),
                    entry.subject,
                    int(entry.is_active),
                ),
            )
        return schedule_id

    def update(self, entry: ScheduleEntry) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE schedules
                SET teacher_id=%s, classroom_id=%s, day=%s, start_time=%s, end_time=%s, subject=%s, is_active=%s
                WHERE schedule_id=%s
                """,
                (
                    entry.teacher_id,
                    entry.classroom_id,
                    entry.day.value,
                    entry.start_time.to_time(),
                    entry.end_time.to_time(),
                    entry.subject,
                    int(entry.is_active),
                    entry.schedule_id,
                ),
            )
            return cur.rowcount > 0

    def set_active(self, *, schedule_id: str, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE schedules SET is_active=%s WHERE schedule_id=%s",
                (int(is_active), schedule_id),
            )
            return cur.rowcount > 0

    @staticmethod
    def _to_entry(r) -> ScheduleEntry:
        return ScheduleEntry(
            schedule_id=str(r["schedule_id"]),
            teacher_id=str(r["teacher_id"]),
            classroom_id=str(r["classroom_id"]),
            day=Weekday.parse(r["day"]),
            start_time=normalize_mysql_time(r["start_time"]),
            end_time=normalize_mysql_time(r["end_time"]),
            subject=r["subject"],
            is_active=bool(r["is_active"]),
        )
