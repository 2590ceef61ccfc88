from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from .enums import ErrorCode

if TYPE_CHECKING:
    from ..schedules.model import ScheduleEntry


class DomainError(Exception):
    """Base exception for business rule violations."""

    code = ErrorCode.VALIDATION_ERROR


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class TapError(DomainError):
    """A rejected tap-in/tap-out. The caller should ask for a re-scan."""


class UnknownBadge(TapError):
    code = ErrorCode.UNKNOWN_BADGE

    def __init__(self, badge_id: str):
        super().__init__("Invalid RFID or teacher not found")
        self.badge_id = badge_id


class AlreadyActive(TapError):
    code = ErrorCode.ALREADY_ACTIVE

    def __init__(self, teacher_id: str):
        super().__init__("Already tapped in today")
        self.teacher_id = teacher_id


class OutsideSchedule(TapError):
    code = ErrorCode.OUTSIDE_SCHEDULE

    def __init__(self, reason: str, windows: Sequence[str] = ()):
        super().__init__(reason)
        self.reason = reason
        self.windows = list(windows)


class NoActiveSession(TapError):
    code = ErrorCode.NO_ACTIVE_SESSION

    def __init__(self, teacher_id: str):
        super().__init__("No active session found for today")
        self.teacher_id = teacher_id


class NotFound(DomainError):
    code = ErrorCode.NOT_FOUND


class ScheduleConflict(DomainError):
    code = ErrorCode.SCHEDULE_CONFLICT

    def __init__(self, conflicting: "ScheduleEntry"):
        super().__init__(
            "Schedule conflict detected! This classroom is already booked during that time "
            f"({conflicting.day.value} {conflicting.start_time}-{conflicting.end_time}, {conflicting.subject})"
        )
        self.conflicting = conflicting


class DuplicateOpenSession(DomainError):
    """Raised by attendance repositories when an open record already exists for (teacher, date)."""

    code = ErrorCode.ALREADY_ACTIVE


class InfrastructureError(Exception):
    """Storage or device failure. Distinct from DomainError so callers can offer a retry."""

    code = ErrorCode.REPOSITORY_ERROR


class RepositoryError(InfrastructureError):
    """Raised when the persistent store cannot be reached or fails mid-operation."""


class ReaderUnavailable(InfrastructureError):
    code = ErrorCode.READER_UNAVAILABLE

    def __init__(self, classroom_id: str):
        super().__init__("RFID Terminal offline - Cannot process scan")
        self.classroom_id = classroom_id
