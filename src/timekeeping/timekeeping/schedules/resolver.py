"""Per employee-type work schedules.

Unknown or missing employee types fall back to the default schedule; callers
never have to validate what comes back.
"""

from __future__ import annotations

from typing import Mapping, Optional

from ..common.validators import require_minute_of_day, require_non_empty
from ..core.enums import EmployeeType
from ..core.exceptions import ValidationError
from .model import AttendanceSchedule, ScheduleMinutes

TEACHING_SCHEDULE = AttendanceSchedule(
    morning_start="07:30",
    morning_end="11:30",
    afternoon_start="12:30",
    afternoon_end="16:30",
)

NON_TEACHING_SCHEDULE = AttendanceSchedule(
    morning_start="08:00",
    morning_end="12:00",
    afternoon_start="13:00",
    afternoon_end="17:00",
)

DEFAULT_SCHEDULE = NON_TEACHING_SCHEDULE

DEFAULT_SCHEDULES: Mapping[str, AttendanceSchedule] = {
    EmployeeType.TEACHING_PERSONNEL.value: TEACHING_SCHEDULE,
    EmployeeType.NON_TEACHING_PERSONNEL.value: NON_TEACHING_SCHEDULE,
    EmployeeType.CASUAL_PLANTILLA.value: NON_TEACHING_SCHEDULE,
}


def time_to_minutes(time_str: str) -> int:
    """Convert ``HH:MM`` to minutes from midnight."""

    text = require_non_empty(time_str, "time")
    hours_s, sep, minutes_s = text.partition(":")
    if not sep:
        raise ValidationError(f"Invalid time string: {time_str!r}")
    try:
        hours, minutes = int(hours_s), int(minutes_s)
    except ValueError as exc:
        raise ValidationError(f"Invalid time string: {time_str!r}") from exc
    if not 0 <= minutes < 60:
        raise ValidationError(f"Invalid time string: {time_str!r}")
    return require_minute_of_day(hours * 60 + minutes, "time")


def minutes_to_time(minutes: int) -> str:
    """Convert minutes from midnight to ``HH:MM``."""

    hours, mins = divmod(int(minutes), 60)
    return f"{hours:02d}:{mins:02d}"


def schedule_to_minutes(schedule: AttendanceSchedule) -> ScheduleMinutes:
    return ScheduleMinutes(
        morning_start=time_to_minutes(schedule.morning_start),
        morning_end=time_to_minutes(schedule.morning_end),
        afternoon_start=time_to_minutes(schedule.afternoon_start),
        afternoon_end=time_to_minutes(schedule.afternoon_end),
    )


class ScheduleResolver:
    """Looks up the schedule for an employee-type tag (case-insensitive)."""

    def __init__(
        self,
        schedules: Optional[Mapping[str, AttendanceSchedule]] = None,
        *,
        default: AttendanceSchedule = DEFAULT_SCHEDULE,
    ):
        source = DEFAULT_SCHEDULES if schedules is None else schedules
        self._schedules = {key.upper(): value for key, value in source.items()}
        self._default = default
        # Boundaries are validated here; lookups never raise.
        self._minutes = {key: schedule_to_minutes(value) for key, value in self._schedules.items()}
        self._default_minutes = schedule_to_minutes(default)

    def get_schedule(self, employee_type: Optional[str]) -> AttendanceSchedule:
        if not employee_type:
            return self._default
        return self._schedules.get(str(employee_type).upper(), self._default)

    def get_schedule_in_minutes(self, employee_type: Optional[str]) -> ScheduleMinutes:
        if not employee_type:
            return self._default_minutes
        return self._minutes.get(str(employee_type).upper(), self._default_minutes)


_default_resolver = ScheduleResolver()


def get_schedule_for_employee_type(employee_type: Optional[str]) -> AttendanceSchedule:
    return _default_resolver.get_schedule(employee_type)


def get_schedule_in_minutes(employee_type: Optional[str]) -> ScheduleMinutes:
    return _default_resolver.get_schedule_in_minutes(employee_type)
