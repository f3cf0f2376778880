from __future__ import annotations

from typing import Optional

from ...core.constants import NOON_MINUTES
from ...schedules.model import ScheduleMinutes
from ..model import AttendanceRecord
from .base import DeviationStrategy, minute_of_day, precomputed_minutes


class LateStrategy(DeviationStrategy):
    """Arrival after the session start, summed over both sessions."""

    def precomputed(self, record: AttendanceRecord) -> Optional[int]:
        return precomputed_minutes(record.late_minutes)

    def session_minutes(self, record: AttendanceRecord, schedule: ScheduleMinutes) -> int:
        total = 0

        morning_in = minute_of_day(record.morning_time_in)
        if morning_in is not None:
            total += max(0, morning_in - schedule.morning_start)

        afternoon_in = minute_of_day(record.afternoon_time_in)
        if afternoon_in is not None:
            total += max(0, afternoon_in - schedule.afternoon_start)

        # Legacy single punch: before noon counts against the morning start.
        if not record.morning_time_in and not record.afternoon_time_in:
            single_in = minute_of_day(record.time_in)
            if single_in is not None:
                start = schedule.morning_start if single_in < NOON_MINUTES else schedule.afternoon_start
                total += max(0, single_in - start)

        return total
