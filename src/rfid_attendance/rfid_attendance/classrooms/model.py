from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Classroom:
    classroom_id: str
    name: str
    location: str
    capacity: Optional[int] = None
    is_active: bool = True
