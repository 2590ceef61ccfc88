from __future__ import annotations

from typing import Optional

from ..core.enums import Weekday
from ..core.exceptions import ValidationError
from .datetime_utils import TimeOfDay


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_time(value, field_name: str) -> TimeOfDay:
    if isinstance(value, TimeOfDay):
        return value
    try:
        return TimeOfDay.parse(require_non_empty(value, field_name))
    except ValueError:
        raise ValidationError(f"{field_name} must be HH:MM") from None


def require_weekday(value, field_name: str = "day") -> Weekday:
    if isinstance(value, Weekday):
        return value
    try:
        return Weekday.parse(require_non_empty(value, field_name))
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid day of week") from None


def require_time_range(start: TimeOfDay, end: TimeOfDay) -> None:
    if not start < end:
        raise ValidationError("start time must be before end time")


def require_bool(value, field_name: str) -> bool:
    # JSON booleans only; "false" must not read as truthy
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a boolean")
    return value
