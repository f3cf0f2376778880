from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from ...common.manila_time import manila_minute_of_day
from ...core.enums import DayStatus
from ...schedules.model import ScheduleMinutes
from ..model import AttendanceRecord


def precomputed_minutes(value: Any) -> Optional[int]:
    """A stored minute count if it is a non-negative integer, else ``None``."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    if isinstance(value, str):
        if not value.strip().isdigit():
            return None
        value = int(value.strip())
    if not isinstance(value, int) or value < 0:
        return None
    return value


def minute_of_day(value: Any) -> Optional[int]:
    return manila_minute_of_day(value) if value else None


def is_marked_absent(record: AttendanceRecord) -> bool:
    """No time-in for the day, or a status of "absent"."""
    if record.is_absent:
        return True
    status = getattr(record.status, "value", record.status)
    return str(status or "").lower() == DayStatus.ABSENT.value


class DeviationStrategy(ABC):
    """Strategy Pattern: minutes a day deviates from its schedule in one direction."""

    def minutes(self, record: AttendanceRecord, schedule: ScheduleMinutes) -> int:
        if is_marked_absent(record):
            return 0

        stored = self.precomputed(record)
        if stored is not None and stored > 0:
            return stored

        return max(self.session_minutes(record, schedule), 0)

    @abstractmethod
    def precomputed(self, record: AttendanceRecord) -> Optional[int]:
        raise NotImplementedError

    @abstractmethod
    def session_minutes(self, record: AttendanceRecord, schedule: ScheduleMinutes) -> int:
        raise NotImplementedError
