from __future__ import annotations

from ..common.datetime_utils import TimeOfDay, format_minutes
from ..core.constants import DEFAULT_GRACE_PERIOD_MINUTES, NO_SCHEDULE_REASON
from ..core.enums import Weekday
from ..schedules.model import ScheduleEntry
from ..schedules.repository import ScheduleRepository
from .model import WindowCheck


class GracePeriodValidator:
    """Decide whether a tap-in falls inside a scheduled class window.

    The effective window of an entry is [start - G, end + G], inclusive on both
    ends, G being the grace period in minutes. When several windows contain the
    same instant the entry with the earliest start wins (then earliest end, then id).
    """

    def __init__(self, schedules: ScheduleRepository, *, grace_minutes: int = DEFAULT_GRACE_PERIOD_MINUTES):
        if int(grace_minutes) < 0:
            raise ValueError("grace_minutes must not be negative")
        self._schedules = schedules
        self._grace_minutes = int(grace_minutes)

    @property
    def grace_minutes(self) -> int:
        return self._grace_minutes

    def effective_window(self, entry: ScheduleEntry) -> tuple[int, int]:
        return entry.start_time.shifted(-self._grace_minutes), entry.end_time.shifted(self._grace_minutes)

    def describe_window(self, entry: ScheduleEntry) -> str:
        lo, hi = self.effective_window(entry)
        return f"{format_minutes(lo)}-{format_minutes(hi)} ({entry.subject})"

    def is_within_schedule(
        self,
        teacher_id: str,
        classroom_id: str,
        day: Weekday,
        time_of_day: TimeOfDay,
    ) -> WindowCheck:
        entries = self._schedules.list_active_for(teacher_id=teacher_id, classroom_id=classroom_id, day=day)
        entries = sorted((e for e in entries if e.is_active), key=ScheduleEntry.sort_key)
        if not entries:
            return WindowCheck(valid=False, reason=NO_SCHEDULE_REASON)

        now = time_of_day.minutes
        for entry in entries:
            lo, hi = self.effective_window(entry)
            if lo <= now <= hi:
                return WindowCheck(valid=True, reason="within schedule", matched_entry=entry)

        windows = [self.describe_window(e) for e in entries]
        return WindowCheck(
            valid=False,
            reason=f"outside schedule; allowed windows: {', '.join(windows)}",
            windows=windows,
        )
