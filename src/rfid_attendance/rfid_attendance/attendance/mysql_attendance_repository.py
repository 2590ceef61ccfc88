from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import DuplicateOpenSession
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "record_id, teacher_id, classroom_id, work_date, tap_in_time, tap_out_time, duration_minutes, subject"


class MySQLAttendanceRepository(AttendanceRepository):
    """attendance_records backed by MySQL.

    The open-session rule is enforced by the unique key uq_open_session on
    (teacher_id, work_date, open_marker); open_marker is 1 while tap_out_time is
    NULL and NULL afterwards, so closed rows never collide.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_open(self, teacher_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE teacher_id=%s AND work_date=%s AND tap_out_time IS NULL
                """,
                (teacher_id, work_date),
            )
            r = fetchone(cur)
            return self._to_record(r) if r else None

    def create_open(self, record: AttendanceRecord) -> str:
        record_id = record.record_id or str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO attendance_records(record_id, teacher_id, classroom_id, work_date, tap_in_time, subject)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record_id,
                        record.teacher_id,
                        record.classroom_id,
                        record.work_date,
                        record.tap_in_time,
                        record.subject,
                    ),
                )
            except mysql.connector.IntegrityError as e:
                if is_duplicate_key(e):
                    raise DuplicateOpenSession(record.teacher_id) from e
                raise
        return record_id

    def close(self, *, record_id: str, tap_out_time: datetime, duration_minutes: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET tap_out_time=%s, duration_minutes=%s
                WHERE record_id=%s AND tap_out_time IS NULL
                """,
                (tap_out_time, int(duration_minutes), record_id),
            )
            return cur.rowcount > 0

    def list_for_teacher_and_date(self, teacher_id: str, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE teacher_id=%s AND work_date=%s
                ORDER BY tap_in_time ASC
                """,
                (teacher_id, work_date),
            )
            return [self._to_record(r) for r in fetchall(cur)]

    def get_recent_for_teacher(self, teacher_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE teacher_id=%s
                ORDER BY tap_in_time DESC
                LIMIT %s
                """,
                (teacher_id, int(limit)),
            )
            return [self._to_record(r) for r in fetchall(cur)]

    @staticmethod
    def _to_record(r) -> AttendanceRecord:
        return AttendanceRecord(
            record_id=str(r["record_id"]),
            teacher_id=str(r["teacher_id"]),
            classroom_id=str(r["classroom_id"]),
            work_date=r["work_date"],
            tap_in_time=r["tap_in_time"],
            tap_out_time=r.get("tap_out_time"),
            duration_minutes=int(r["duration_minutes"]) if r.get("duration_minutes") is not None else None,
            subject=r.get("subject"),
        )
