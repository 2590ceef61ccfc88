from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_duration
from ..schedules.model import ScheduleEntry


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance session of a teacher in a classroom.

    Created open (tap_out_time is None) on tap-in and closed exactly once on tap-out.
    """

    record_id: str
    teacher_id: str
    classroom_id: str
    work_date: date
    tap_in_time: datetime
    tap_out_time: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    subject: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.tap_out_time is None

    def to_row(self) -> dict:
        return {
            "id": self.record_id,
            "teacherId": self.teacher_id,
            "classroomId": self.classroom_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "tapInTime": self.tap_in_time.isoformat(),
            "tapOutTime": self.tap_out_time.isoformat() if self.tap_out_time else None,
            "durationMinutes": self.duration_minutes,
            "subject": self.subject,
        }


@dataclass(frozen=True)
class WindowCheck:
    """Outcome of the grace-period check for one tap-in."""

    valid: bool
    reason: str
    matched_entry: Optional[ScheduleEntry] = None
    windows: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class TapInResult:
    teacher: str
    subject: str
    tapped_at: datetime
    record_id: str

    def to_payload(self) -> dict:
        return {
            "success": True,
            "message": f"Welcome {self.teacher}!",
            "teacher": self.teacher,
            "subject": self.subject,
            "time": self.tapped_at.strftime("%H:%M:%S"),
            "recordId": self.record_id,
        }


@dataclass(frozen=True)
class TapOutResult:
    teacher: str
    duration_minutes: int
    tapped_at: datetime
    record_id: str

    def to_payload(self) -> dict:
        return {
            "success": True,
            "message": f"Goodbye {self.teacher}!",
            "teacher": self.teacher,
            "duration": format_duration(self.duration_minutes),
            "durationMinutes": self.duration_minutes,
            "time": self.tapped_at.strftime("%H:%M:%S"),
            "recordId": self.record_id,
        }
