from __future__ import annotations

from typing import Optional

from ...core.constants import LEGACY_OUT_SPLIT_MINUTES
from ...schedules.model import ScheduleMinutes
from ..model import AttendanceRecord
from .base import DeviationStrategy, minute_of_day, precomputed_minutes


class UndertimeStrategy(DeviationStrategy):
    """Departure before the session end. Staying late earns no credit."""

    def precomputed(self, record: AttendanceRecord) -> Optional[int]:
        return precomputed_minutes(record.undertime_minutes)

    def session_minutes(self, record: AttendanceRecord, schedule: ScheduleMinutes) -> int:
        total = 0

        morning_out = minute_of_day(record.morning_time_out)
        if morning_out is not None:
            total += max(0, schedule.morning_end - morning_out)

        afternoon_out = minute_of_day(record.afternoon_time_out)
        if afternoon_out is not None:
            total += max(0, schedule.afternoon_end - afternoon_out)

        # Legacy single punch: after 13:00 counts against the afternoon end.
        if not record.morning_time_out and not record.afternoon_time_out:
            single_out = minute_of_day(record.time_out)
            if single_out is not None:
                end = schedule.afternoon_end if single_out > LEGACY_OUT_SPLIT_MINUTES else schedule.morning_end
                total += max(0, end - single_out)

        return total
