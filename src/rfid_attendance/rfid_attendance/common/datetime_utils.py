from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Optional, Protocol
from zoneinfo import ZoneInfo

from ..core.constants import MINUTES_PER_DAY
from ..core.enums import Weekday


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """Time of day as minutes since midnight.

    Schedule windows are compared as integers so no string/date arithmetic is
    involved. Seconds are dropped on conversion: a scan at 09:15:40 counts as 09:15.
    """

    minutes: int

    def __post_init__(self):
        if not 0 <= int(self.minutes) < MINUTES_PER_DAY:
            raise ValueError(f"Time of day out of range: {self.minutes}")

    @classmethod
    def parse(cls, value: str) -> "TimeOfDay":
        """Parse "HH:MM" (or "HH:MM:SS")."""

        parts = (value or "").strip().split(":")
        if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
            raise ValueError(f"Invalid time string: {value!r}")
        hours, minutes = int(parts[0]), int(parts[1])
        if hours > 23 or minutes > 59:
            raise ValueError(f"Invalid time string: {value!r}")
        return cls(hours * 60 + minutes)

    @classmethod
    def from_time(cls, value: time) -> "TimeOfDay":
        return cls(value.hour * 60 + value.minute)

    @classmethod
    def from_datetime(cls, value: datetime) -> "TimeOfDay":
        return cls.from_time(value.time())

    def shifted(self, minutes: int) -> int:
        """Minute offset from midnight; may fall outside 0..1439, no wrap-around."""

        return self.minutes + int(minutes)

    def to_time(self) -> time:
        return time(hour=self.minutes // 60, minute=self.minutes % 60)

    def __str__(self) -> str:
        return format_minutes(self.minutes)


def format_minutes(minutes: int) -> str:
    """Render a minute offset as HH:MM.

    Offsets outside the day are clamped: windows never wrap, so the earliest
    tap a window accepts on its own day is 00:00 and the latest is 23:59.
    """

    minutes = min(max(int(minutes), 0), MINUTES_PER_DAY - 1)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_duration(minutes: int) -> str:
    return f"{minutes // 60}h {minutes % 60}m"


def elapsed_minutes(start: datetime, end: datetime) -> int:
    """Whole minutes between two instants, rounded half-up, never negative."""

    seconds = (end - start).total_seconds()
    return max(0, math.floor(seconds / 60 + 0.5))


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def calendar_date(value: datetime) -> date:
    return value.date()


def day_of_week(value: datetime) -> Weekday:
    return Weekday.of(value.date())


def time_of_day(value: datetime) -> TimeOfDay:
    return TimeOfDay.from_datetime(value)


class Clock(Protocol):
    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    """Wall-clock time in the school's time zone, as a naive local datetime.

    Note: Time zone handling lives here only; everything downstream works with
    local calendar dates and times of day.
    """

    def __init__(self, tz_name: Optional[str] = None):
        self._tz = ZoneInfo(tz_name) if tz_name else None

    def now(self) -> datetime:
        if self._tz is None:
            return datetime.now()
        return datetime.now(self._tz).replace(tzinfo=None)


@dataclass
class FixedClock:
    """Clock frozen at a given instant (tests, replays)."""

    value: datetime = field(default_factory=datetime.now)

    def now(self) -> datetime:
        return self.value

    def advance(self, *, minutes: int = 0, seconds: int = 0) -> datetime:
        self.value = self.value + timedelta(minutes=minutes, seconds=seconds)
        return self.value
