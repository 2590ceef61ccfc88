"""Schedule overlap detection.

Two entries conflict when they book the same classroom on the same day and
their half-open intervals [start, end) intersect. Touching boundaries
(08:00-09:00 and 09:00-10:00) are not a conflict.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from .model import ScheduleEntry


def intervals_overlap(a: ScheduleEntry, b: ScheduleEntry) -> bool:
    return a.start_time < b.end_time and b.start_time < a.end_time


def conflicts_with(candidate: ScheduleEntry, other: ScheduleEntry) -> bool:
    if not candidate.is_active or not other.is_active:
        return False
    if candidate.schedule_id and candidate.schedule_id == other.schedule_id:
        return False
    return (
        candidate.classroom_id == other.classroom_id
        and candidate.day == other.day
        and intervals_overlap(candidate, other)
    )


def find_conflicts(candidate: ScheduleEntry, existing: Iterable[ScheduleEntry]) -> List[ScheduleEntry]:
    """Existing entries that overlap the candidate, earliest start first."""

    found = [e for e in existing if conflicts_with(candidate, e)]
    found.sort(key=ScheduleEntry.sort_key)
    return found


def first_conflict(candidate: ScheduleEntry, existing: Iterable[ScheduleEntry]) -> Optional[ScheduleEntry]:
    found = find_conflicts(candidate, existing)
    return found[0] if found else None


def has_conflict(candidate: ScheduleEntry, existing: Iterable[ScheduleEntry]) -> bool:
    return any(conflicts_with(candidate, e) for e in existing)
