from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Store of attendance sessions.

    Implementations own the "at most one open record per (teacher, date)" rule:
    create_open must reject a second open record atomically, not rely on a
    prior find_open by the caller.
    """

    def find_open(self, teacher_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_open(self, record: AttendanceRecord) -> str:
        """Insert an open record. Raises DuplicateOpenSession if one already exists.

        Returns record_id.
        """

        raise NotImplementedError

    def close(self, *, record_id: str, tap_out_time: datetime, duration_minutes: int) -> bool:
        """Set tap-out on a still-open record. False if it was already closed or is missing."""

        raise NotImplementedError

    def list_for_teacher_and_date(self, teacher_id: str, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_teacher(self, teacher_id: str, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
