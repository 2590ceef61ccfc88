from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Teacher:
    """Domain entity: a teacher identified by an RFID badge.

    Note: Owned by the identity collaborator; read-only reference data here.
    """

    teacher_id: str
    name: str
    badge_id: str
    is_active: bool = True
