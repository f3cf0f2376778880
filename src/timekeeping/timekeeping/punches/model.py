from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from ..common.manila_time import InstantLike, manila_end_of_day_utc, manila_start_of_day_utc, to_utc_iso
from ..core.enums import ApprovalStatus, PunchType, RecordSource
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Punch:
    """Một lần chấm công IN/OUT (append-only, không bao giờ sửa)."""

    user_id: str
    timestamp: datetime
    punch_type: PunchType


@dataclass(frozen=True)
class PunchUser:
    """User attributes joined onto grouped punch rows."""

    user_id: str
    first_name: str
    last_name: str
    employee_id: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    employee_type: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "employeeId": self.employee_id,
            "department": self.department,
            "position": self.position,
            "employeeType": self.employee_type,
        }


@dataclass(frozen=True)
class PunchFilters:
    start_date: Optional[InstantLike] = None
    end_date: Optional[InstantLike] = None
    user_id: Optional[str] = None
    department: Optional[str] = None

    def time_bounds(self) -> tuple[Optional[datetime], Optional[datetime]]:
        """UTC bounds covering whole Manila days: start of ``start_date``, end of ``end_date``."""

        start = end = None
        if self.start_date:
            start = manila_start_of_day_utc(self.start_date)
            if start is None:
                raise ValidationError(f"Invalid start date: {self.start_date!r}")
        if self.end_date:
            end = manila_end_of_day_utc(self.end_date)
            if end is None:
                raise ValidationError(f"Invalid end date: {self.end_date!r}")
        return start, end


@dataclass(frozen=True)
class AttendanceKey:
    """Identity of a derived record: one user on one Manila day."""

    user_id: str
    day: str

    def __str__(self) -> str:
        return f"punch:{self.user_id}:{self.day}"


@dataclass(frozen=True)
class PunchDayRow:
    """Read-model: punches of one user grouped on one Manila day.

    ``day`` is normally a ``date``; stores may hand back something unparseable.
    """

    user: PunchUser
    day: Any
    time_in: Optional[datetime]
    time_out: Optional[datetime]
    in_count: int = 0
    out_count: int = 0


@dataclass(frozen=True)
class PunchDayCounts:
    total: int
    unique_employees: int


@dataclass(frozen=True)
class PunchAttendanceRecord:
    key: AttendanceKey
    date: str
    time_in: Optional[datetime]
    time_out: Optional[datetime]
    hours_worked: Optional[float]
    is_late: bool
    is_absent: bool
    user: PunchUser
    in_count: int = 0
    out_count: int = 0
    status: ApprovalStatus = ApprovalStatus.APPROVED
    source: RecordSource = RecordSource.PUNCH

    @property
    def id(self) -> str:
        return str(self.key)

    @property
    def user_id(self) -> str:
        return self.key.user_id

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "date": self.date,
            "timeIn": to_utc_iso(self.time_in) if self.time_in else None,
            "timeOut": to_utc_iso(self.time_out) if self.time_out else None,
            "hoursWorked": self.hours_worked,
            "isLate": self.is_late,
            "isAbsent": self.is_absent,
            "status": self.status.value,
            "rejectionReason": None,
            "approvedById": None,
            "approvedAt": None,
            "user": self.user.to_dict(),
            "approvedBy": None,
            "source": self.source.value,
        }


@dataclass(frozen=True)
class RowDiagnostic:
    record_id: str
    value: str
    message: str


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int
    total: int
    pages: int


@dataclass(frozen=True)
class PunchAttendancePage:
    records: list[PunchAttendanceRecord]
    pagination: Pagination
    unique_employees: int
    diagnostics: list[RowDiagnostic] = field(default_factory=list)


@dataclass(frozen=True)
class PunchAttendanceAll:
    records: list[PunchAttendanceRecord]
    unique_employees: int
    diagnostics: list[RowDiagnostic] = field(default_factory=list)


def day_key_of(value: Any) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)
