from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AttendanceSchedule:
    """Work schedule for one employee type, as ``HH:MM`` wall-clock strings."""

    morning_start: str
    morning_end: str
    afternoon_start: str
    afternoon_end: str


@dataclass(frozen=True)
class ScheduleMinutes:
    """Same boundaries as minutes from Manila midnight, each in ``[0, 1440)``."""

    morning_start: int
    morning_end: int
    afternoon_start: int
    afternoon_end: int
