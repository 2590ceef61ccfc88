from __future__ import annotations

from typing import Optional, Protocol

from .model import Teacher


class TeacherRepository(Protocol):
    """Repository interface for teachers.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, teacher_id: str) -> Optional[Teacher]:
        raise NotImplementedError

    def get_by_badge(self, badge_id: str) -> Optional[Teacher]:
        """Teacher owning the badge, active or not. Badge ids are unique."""

        raise NotImplementedError
