from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Classroom
from .repository import ClassroomRepository


class MySQLClassroomRepository(ClassroomRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, classroom_id: str) -> Optional[Classroom]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT classroom_id, name, location, capacity, is_active
                FROM classrooms
                WHERE classroom_id=%s
                """,
                (classroom_id,),
            )
            r = fetchone(cur)
            return self._to_classroom(r) if r else None

    def list_active(self) -> Sequence[Classroom]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT classroom_id, name, location, capacity, is_active
                FROM classrooms
                WHERE is_active=1
                ORDER BY name
                """
            )
            return [self._to_classroom(r) for r in fetchall(cur)]

    @staticmethod
    def _to_classroom(r) -> Classroom:
        return Classroom(
            classroom_id=str(r["classroom_id"]),
            name=r["name"],
            location=r["location"],
            capacity=int(r["capacity"]) if r.get("capacity") is not None else None,
            is_active=bool(r["is_active"]),
        )
