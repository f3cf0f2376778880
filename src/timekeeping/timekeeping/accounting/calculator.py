from __future__ import annotations

from typing import Optional

from ..core.constants import EMPTY_DISPLAY
from ..schedules.model import ScheduleMinutes
from ..schedules.resolver import ScheduleResolver
from .factory import DeviationStrategyFactory
from .model import AttendanceRecord


def format_duration(minutes: int) -> str:
    """``"1h 5m"``, ``"45m"``, or ``"-"`` when there is nothing to report."""

    if minutes <= 0:
        return EMPTY_DISPLAY
    hours, mins = divmod(int(minutes), 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"


class TimeAccountingCalculator:
    """Lateness and undertime of one attendance day against its schedule.

    Shared by the admin and employee views. The schedule comes from the
    record's employee type unless one is passed explicitly.
    """

    def __init__(
        self,
        resolver: Optional[ScheduleResolver] = None,
        *,
        strategy_factory: Optional[DeviationStrategyFactory] = None,
    ):
        self._resolver = resolver or ScheduleResolver()
        factory = strategy_factory or DeviationStrategyFactory()
        self._late = factory.for_late()
        self._undertime = factory.for_undertime()

    def schedule_for(self, record: AttendanceRecord) -> ScheduleMinutes:
        employee_type = record.employee_type
        if employee_type is None and record.user is not None:
            employee_type = record.user.employee_type
        return self._resolver.get_schedule_in_minutes(employee_type)

    def late_minutes(self, record: AttendanceRecord, schedule: Optional[ScheduleMinutes] = None) -> int:
        return self._late.minutes(record, schedule or self.schedule_for(record))

    def undertime_minutes(self, record: AttendanceRecord, schedule: Optional[ScheduleMinutes] = None) -> int:
        return self._undertime.minutes(record, schedule or self.schedule_for(record))

    def calculate_late(self, record: AttendanceRecord, schedule: Optional[ScheduleMinutes] = None) -> str:
        return format_duration(self.late_minutes(record, schedule))

    def calculate_undertime(self, record: AttendanceRecord, schedule: Optional[ScheduleMinutes] = None) -> str:
        return format_duration(self.undertime_minutes(record, schedule))
