from __future__ import annotations

from dataclasses import dataclass

from ..common.datetime_utils import TimeOfDay
from ..core.enums import Weekday


@dataclass(frozen=True)
class ScheduleEntry:
    """Domain entity: a weekly class slot for a teacher in a classroom.

    The slot covers the half-open interval [start_time, end_time).
    """

    schedule_id: str
    teacher_id: str
    classroom_id: str
    day: Weekday
    start_time: TimeOfDay
    end_time: TimeOfDay
    subject: str
    is_active: bool = True

    def sort_key(self) -> tuple:
        return (self.start_time, self.end_time, self.schedule_id)

    def to_row(self) -> dict:
        return {
            "id": self.schedule_id,
            "teacherId": self.teacher_id,
            "classroomId": self.classroom_id,
            "day": self.day.value,
            "startTime": str(self.start_time),
            "endTime": str(self.end_time),
            "subject": self.subject,
            "isActive": self.is_active,
        }
