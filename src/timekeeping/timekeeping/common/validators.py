from __future__ import annotations

from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_minute_of_day(value: int, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < MINUTES_PER_DAY:
        raise ValidationError(f"{field_name} must be a minute of day in [0, {MINUTES_PER_DAY})")
    return value
