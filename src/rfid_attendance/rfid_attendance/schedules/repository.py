from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Weekday
from .model import ScheduleEntry


class ScheduleRepository(Protocol):
    def get_by_id(self, schedule_id: str) -> Optional[ScheduleEntry]:
        raise NotImplementedError

    def list_active_for(self, *, teacher_id: str, classroom_id: str, day: Weekday) -> Sequence[ScheduleEntry]:
        """Active entries of one teacher in one classroom on one day (tap-in window lookup)."""

        raise NotImplementedError

    def list_active_for_classroom_day(self, *, classroom_id: str, day: Weekday) -> Sequence[ScheduleEntry]:
        """Active entries of any teacher in a classroom on a day (conflict checks)."""

        raise NotImplementedError

    def list_all(
        self,
        *,
        classroom_id: Optional[str] = None,
        day: Optional[Weekday] = None,
        teacher_id: Optional[str] = None,
    ) -> Sequence[ScheduleEntry]:
        raise NotImplementedError

    def create(self, entry: ScheduleEntry) -> str:
        """Insert a new entry. Returns schedule_id."""

        raise NotImplementedError

    def update(self, entry: ScheduleEntry) -> bool:
        raise NotImplementedError

    def set_active(self, *, schedule_id: str, is_active: bool) -> bool:
        raise NotImplementedError
