from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import Clock, SystemClock, calendar_date, day_of_week, elapsed_minutes, time_of_day
from ..core.enums import SessionState
from ..core.exceptions import (
    AlreadyActive,
    DuplicateOpenSession,
    NoActiveSession,
    OutsideSchedule,
    ReaderUnavailable,
    UnknownBadge,
)
from ..teachers.model import Teacher
from ..teachers.repository import TeacherRepository
from .model import AttendanceRecord, TapInResult, TapOutResult
from .reader import AlwaysOnline, ReaderAvailability
from .repository import AttendanceRepository
from .validator import GracePeriodValidator

logger = logging.getLogger(__name__)


class TapEngine:
    """Tap-in/tap-out state machine, per (teacher, date):

        NO_SESSION --tap_in--> ACTIVE_SESSION --tap_out--> CLOSED

    Each operation does a bounded number of reads followed by at most one
    write. Failures raise a TapError before anything is written; the
    repository's rejection of a second open record is the final word on
    AlreadyActive, the find_open pre-check only avoids a pointless insert.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        teachers: TeacherRepository,
        validator: GracePeriodValidator,
        *,
        clock: Optional[Clock] = None,
        readers: Optional[ReaderAvailability] = None,
    ):
        self._attendance = attendance
        self._teachers = teachers
        self._validator = validator
        self._clock = clock or SystemClock()
        self._readers = readers or AlwaysOnline()

    def tap_in(self, badge_id: str, classroom_id: str, *, now: Optional[datetime] = None) -> TapInResult:
        now = now or self._clock.now()
        self._ensure_reader(classroom_id)
        teacher = self._resolve(badge_id)

        today = calendar_date(now)
        if self._attendance.find_open(teacher.teacher_id, today):
            logger.info("tap-in rejected teacher=%s code=ALREADY_ACTIVE", teacher.teacher_id)
            raise AlreadyActive(teacher.teacher_id)

        check = self._validator.is_within_schedule(teacher.teacher_id, classroom_id, day_of_week(now), time_of_day(now))
        if not check.valid:
            logger.info("tap-in rejected teacher=%s classroom=%s code=OUTSIDE_SCHEDULE", teacher.teacher_id, classroom_id)
            raise OutsideSchedule(check.reason, check.windows)

        subject = check.matched_entry.subject
        record = AttendanceRecord(
            record_id="",
            teacher_id=teacher.teacher_id,
            classroom_id=classroom_id,
            work_date=today,
            tap_in_time=now,
            subject=subject,
        )
        try:
            record_id = self._attendance.create_open(record)
        except DuplicateOpenSession:
            # Lost a race with a concurrent scan of the same badge.
            logger.info("tap-in rejected teacher=%s code=ALREADY_ACTIVE (concurrent)", teacher.teacher_id)
            raise AlreadyActive(teacher.teacher_id) from None

        logger.info("tap-in teacher=%s classroom=%s subject=%s record=%s", teacher.teacher_id, classroom_id, subject, record_id)
        return TapInResult(teacher=teacher.name, subject=subject, tapped_at=now, record_id=record_id)

    def tap_out(
        self,
        badge_id: str,
        *,
        now: Optional[datetime] = None,
        classroom_id: Optional[str] = None,
    ) -> TapOutResult:
        """Close the open session of today. No schedule check: any open session may be closed."""

        now = now or self._clock.now()
        if classroom_id:
            self._ensure_reader(classroom_id)
        teacher = self._resolve(badge_id)

        record = self._attendance.find_open(teacher.teacher_id, calendar_date(now))
        if not record:
            logger.info("tap-out rejected teacher=%s code=NO_ACTIVE_SESSION", teacher.teacher_id)
            raise NoActiveSession(teacher.teacher_id)

        duration = elapsed_minutes(record.tap_in_time, now)
        if not self._attendance.close(record_id=record.record_id, tap_out_time=now, duration_minutes=duration):
            # Closed by a concurrent tap-out between the read and the write.
            raise NoActiveSession(teacher.teacher_id)

        logger.info("tap-out teacher=%s record=%s duration=%s", teacher.teacher_id, record.record_id, duration)
        return TapOutResult(teacher=teacher.name, duration_minutes=duration, tapped_at=now, record_id=record.record_id)

    def session_state(self, teacher_id: str, work_date: date) -> SessionState:
        records = self._attendance.list_for_teacher_and_date(teacher_id, work_date)
        if not records:
            return SessionState.NO_SESSION
        if any(r.is_open for r in records):
            return SessionState.ACTIVE_SESSION
        return SessionState.CLOSED

    def _resolve(self, badge_id: str) -> Teacher:
        badge_id = (badge_id or "").strip()
        teacher = self._teachers.get_by_badge(badge_id) if badge_id else None
        if not teacher or not teacher.is_active:
            logger.info("tap rejected badge=%s code=UNKNOWN_BADGE", badge_id)
            raise UnknownBadge(badge_id)
        return teacher

    def _ensure_reader(self, classroom_id: str) -> None:
        if not self._readers.is_online(classroom_id):
            logger.warning("reader offline classroom=%s", classroom_id)
            raise ReaderUnavailable(classroom_id)
