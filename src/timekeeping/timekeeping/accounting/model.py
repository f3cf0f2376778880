from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.manila_time import InstantLike
from ..core.enums import ApprovalStatus, RecordSource
from ..punches.model import PunchAttendanceRecord, PunchUser


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): một ngày công.

    Either the legacy single pair (``time_in``/``time_out``) or the dual-session
    fields are filled; materialized rows may carry precomputed
    ``late_minutes``/``undertime_minutes`` which take precedence over recomputing.
    """

    user_id: str
    work_date: Optional[date]
    time_in: Optional[InstantLike] = None
    time_out: Optional[InstantLike] = None
    morning_time_in: Optional[InstantLike] = None
    morning_time_out: Optional[InstantLike] = None
    afternoon_time_in: Optional[InstantLike] = None
    afternoon_time_out: Optional[InstantLike] = None
    hours_worked: Optional[float] = None
    is_late: bool = False
    is_absent: bool = False
    late_minutes: Optional[int] = None
    undertime_minutes: Optional[int] = None
    status: str = ApprovalStatus.PENDING.value
    employee_type: Optional[str] = None
    record_id: Optional[str] = None
    user: Optional[PunchUser] = None
    source: RecordSource = RecordSource.MANUAL

    @classmethod
    def from_punch_record(cls, record: PunchAttendanceRecord) -> "AttendanceRecord":
        try:
            work_date = date.fromisoformat(record.date[:10])
        except ValueError:
            work_date = None
        return cls(
            user_id=record.user_id,
            work_date=work_date,
            time_in=record.time_in,
            time_out=record.time_out,
            hours_worked=record.hours_worked,
            is_late=record.is_late,
            is_absent=record.is_absent,
            status=record.status.value,
            employee_type=record.user.employee_type,
            record_id=record.id,
            user=record.user,
            source=record.source,
        )


@dataclass(frozen=True)
class SummaryStats:
    present: int = 0
    late: int = 0
    absent: int = 0
    on_leave: int = 0
    total_employees: int = 0
