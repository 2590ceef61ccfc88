from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import List, Optional, Sequence

from ..classrooms.repository import ClassroomRepository
from ..common.validators import require_bool, require_non_empty, require_time, require_time_range, require_weekday
from ..core.exceptions import NotFound, ScheduleConflict, ValidationError
from ..teachers.repository import TeacherRepository
from .conflicts import find_conflicts
from .model import ScheduleEntry
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


class ScheduleService:
    """Authoring of schedule entries (admin only, low frequency).

    Every write that leaves an entry active is checked against the other active
    entries of the same classroom and day. A plain read-then-write is enough
    here: schedule edits are assumed to come from a single writer.
    """

    def __init__(
        self,
        schedules: ScheduleRepository,
        teachers: Optional[TeacherRepository] = None,
        classrooms: Optional[ClassroomRepository] = None,
    ):
        self._schedules = schedules
        self._teachers = teachers
        self._classrooms = classrooms

    def list_entries(
        self,
        *,
        classroom_id: Optional[str] = None,
        day: Optional[str] = None,
        teacher_id: Optional[str] = None,
    ) -> Sequence[ScheduleEntry]:
        return self._schedules.list_all(
            classroom_id=classroom_id,
            day=require_weekday(day) if day else None,
            teacher_id=teacher_id,
        )

    def build(
        self,
        *,
        teacher_id: str,
        classroom_id: str,
        day,
        start_time,
        end_time,
        subject: str,
        schedule_id: str = "",
        is_active: bool = True,
    ) -> ScheduleEntry:
        """Validate raw input into a ScheduleEntry (no repository writes)."""

        start = require_time(start_time, "start time")
        end = require_time(end_time, "end time")
        require_time_range(start, end)
        return ScheduleEntry(
            schedule_id=schedule_id,
            teacher_id=require_non_empty(teacher_id, "teacher"),
            classroom_id=require_non_empty(classroom_id, "classroom"),
            day=require_weekday(day),
            start_time=start,
            end_time=end,
            subject=require_non_empty(subject, "subject"),
            is_active=require_bool(is_active, "isActive"),
        )

    def check(self, candidate: ScheduleEntry) -> List[ScheduleEntry]:
        """Dry run: active entries the candidate would overlap."""

        existing = self._schedules.list_active_for_classroom_day(
            classroom_id=candidate.classroom_id, day=candidate.day
        )
        return find_conflicts(candidate, existing)

    def create(self, **fields) -> ScheduleEntry:
        entry = self.build(**fields)
        entry = replace(entry, schedule_id=entry.schedule_id or str(uuid.uuid4()))
        self._ensure_references(entry)
        self._ensure_no_conflict(entry)

        self._schedules.create(entry)
        logger.info(
            "schedule created id=%s classroom=%s %s %s-%s",
            entry.schedule_id, entry.classroom_id, entry.day.value, entry.start_time, entry.end_time,
        )
        return entry

    def update(self, schedule_id: str, **changes) -> ScheduleEntry:
        current = self._get(schedule_id)
        merged = {
            "teacher_id": current.teacher_id,
            "classroom_id": current.classroom_id,
            "day": current.day,
            "start_time": current.start_time,
            "end_time": current.end_time,
            "subject": current.subject,
            "is_active": current.is_active,
        }
        merged.update({k: v for k, v in changes.items() if v is not None})
        entry = self.build(schedule_id=current.schedule_id, **merged)

        self._ensure_references(entry)
        self._ensure_no_conflict(entry)

        if not self._schedules.update(entry):
            raise ValidationError("Failed to update schedule")
        logger.info("schedule updated id=%s", entry.schedule_id)
        return entry

    def deactivate(self, schedule_id: str) -> None:
        """Soft delete: inactive entries no longer take part in taps or conflict checks."""

        self._get(schedule_id)
        if not self._schedules.set_active(schedule_id=schedule_id, is_active=False):
            raise ValidationError("Failed to delete schedule")
        logger.info("schedule deactivated id=%s", schedule_id)

    def reactivate(self, schedule_id: str) -> ScheduleEntry:
        entry = replace(self._get(schedule_id), is_active=True)
        self._ensure_no_conflict(entry)
        if not self._schedules.set_active(schedule_id=schedule_id, is_active=True):
            raise ValidationError("Failed to restore schedule")
        return entry

    def _get(self, schedule_id: str) -> ScheduleEntry:
        entry = self._schedules.get_by_id(schedule_id)
        if not entry:
            raise NotFound("Schedule not found")
        return entry

    def _ensure_no_conflict(self, entry: ScheduleEntry) -> None:
        conflicts = self.check(entry)
        if conflicts:
            logger.info(
                "schedule conflict classroom=%s %s %s-%s with id=%s",
                entry.classroom_id, entry.day.value, entry.start_time, entry.end_time, conflicts[0].schedule_id,
            )
            raise ScheduleConflict(conflicts[0])

    def _ensure_references(self, entry: ScheduleEntry) -> None:
        if self._teachers is not None:
            teacher = self._teachers.get_by_id(entry.teacher_id)
            if not teacher or not teacher.is_active:
                raise ValidationError("Teacher not found")
        if self._classrooms is not None:
            classroom = self._classrooms.get_by_id(entry.classroom_id)
            if not classroom or not classroom.is_active:
                raise ValidationError("Classroom not found")
