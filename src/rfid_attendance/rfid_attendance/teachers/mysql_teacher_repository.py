from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Teacher
from .repository import TeacherRepository


class MySQLTeacherRepository(TeacherRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, teacher_id: str) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT teacher_id, name, badge_id, is_active
                FROM teachers
                WHERE teacher_id=%s
                """,
                (teacher_id,),
            )
            return self._to_teacher(fetchone(cur))

    def get_by_badge(self, badge_id: str) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT teacher_id, name, badge_id, is_active
                FROM teachers
                WHERE badge_id=%s
                """,
                (badge_id,),
            )
            return self._to_teacher(fetchone(cur))

    @staticmethod
    def _to_teacher(r) -> Optional[Teacher]:
        if not r:
            return None
        return Teacher(
            teacher_id=str(r["teacher_id"]),
            name=r["name"],
            badge_id=r["badge_id"],
            is_active=bool(r["is_active"]),
        )
