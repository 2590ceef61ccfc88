from __future__ import annotations

from datetime import date
from enum import Enum


class Weekday(str, Enum):
    """Day of week as persisted in the schedules table."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def of(cls, value: date) -> "Weekday":
        return _ORDER[value.weekday()]

    @classmethod
    def parse(cls, value: str) -> "Weekday":
        """Accept full names ("Monday") or abbreviations ("Mon"), any case."""

        key = (value or "").strip().lower()
        for day in cls:
            if key in (day.value.lower(), day.value[:3].lower()):
                return day
        raise ValueError(f"Invalid day of week: {value!r}")


_ORDER = list(Weekday)


class SessionState(str, Enum):
    """Per (teacher, date) state of the tap state machine."""

    NO_SESSION = "NO_SESSION"
    ACTIVE_SESSION = "ACTIVE_SESSION"
    CLOSED = "CLOSED"


class ErrorCode(str, Enum):
    """Machine-readable codes returned to transport callers."""

    UNKNOWN_BADGE = "UNKNOWN_BADGE"
    ALREADY_ACTIVE = "ALREADY_ACTIVE"
    OUTSIDE_SCHEDULE = "OUTSIDE_SCHEDULE"
    NO_ACTIVE_SESSION = "NO_ACTIVE_SESSION"
    SCHEDULE_CONFLICT = "SCHEDULE_CONFLICT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    READER_UNAVAILABLE = "READER_UNAVAILABLE"
    NOT_FOUND = "NOT_FOUND"
    REPOSITORY_ERROR = "REPOSITORY_ERROR"
