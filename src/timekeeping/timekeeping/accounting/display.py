"""Display helpers shared by attendance tables and summary cards.

Functions take any record exposing ``is_absent``, ``is_late``, ``time_in``
and an optional ``user`` (punch-derived or materialized records alike).
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Optional, Sequence

from ..common.manila_time import to_manila
from ..core.constants import EMPTY_DISPLAY
from ..core.enums import DayStatus
from .model import SummaryStats

logger = logging.getLogger(__name__)

ALL_STATUSES = "all"


def first_time_in(record: Any) -> Any:
    """Legacy time in, else the first session time in."""
    return (
        getattr(record, "time_in", None)
        or getattr(record, "morning_time_in", None)
        or getattr(record, "afternoon_time_in", None)
    )


def get_record_status(record: Any) -> DayStatus:
    if record.is_absent:
        return DayStatus.ABSENT
    time_in = first_time_in(record)
    if time_in and record.is_late:
        return DayStatus.LATE
    if time_in:
        return DayStatus.PRESENT
    return DayStatus.ABSENT


def calculate_summary_stats(records: Iterable[Any], total_employees: int) -> SummaryStats:
    present = late = absent = 0
    for record in records:
        if record.is_absent:
            absent += 1
        elif first_time_in(record):
            if record.is_late:
                late += 1
            else:
                present += 1
    return SummaryStats(present=present, late=late, absent=absent, on_leave=0, total_employees=int(total_employees))


def _searchable_text(record: Any) -> str:
    user = getattr(record, "user", None)
    if user is None:
        return str(getattr(record, "user_id", "") or "").lower()
    parts = [
        f"{user.first_name} {user.last_name}",
        user.employee_id or "",
        user.department or "",
    ]
    return "\n".join(parts).lower()


def filter_attendance_records(records: Sequence[Any], search_term: str, selected_status: str) -> list:
    term = (search_term or "").strip().lower()
    status = (selected_status or ALL_STATUSES).lower()

    out = [
        r for r in records
        if (not term or term in _searchable_text(r))
        and (status == ALL_STATUSES or get_record_status(r).value == status)
    ]
    logger.debug("Filtered attendance records: %d -> %d (search=%r, status=%s)", len(records), len(out), term, status)
    return out


def format_hours(hours: Optional[float]) -> str:
    """``7.5`` -> ``"7:30"``."""
    if not hours:
        return EMPTY_DISPLAY
    whole = math.floor(hours)
    minutes = math.floor((hours - whole) * 60)
    return f"{whole}:{minutes:02d}"


def format_time(value: Any) -> str:
    """Manila clock time as ``"8:05 AM"``."""
    if not value:
        return EMPTY_DISPLAY
    wall = to_manila(value)
    if wall is None:
        return EMPTY_DISPLAY
    hour12 = wall.hour % 12 or 12
    period = "AM" if wall.hour < 12 else "PM"
    return f"{hour12}:{wall.minute:02d} {period}"
