from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import EMPTY_DISPLAY
from ..core.enums import DayStatus
from ..punches.aggregator import PunchAggregator
from ..punches.model import Pagination, PunchFilters
from .calculator import TimeAccountingCalculator
from .display import calculate_summary_stats, first_time_in, format_hours, format_time, get_record_status
from .model import AttendanceRecord, SummaryStats
from .repository import AttendanceRecordRepository

STATUS_LABELS = {
    DayStatus.PRESENT: "Present",
    DayStatus.LATE: "Late",
    DayStatus.ABSENT: "Absent",
}

STATUS_CSS = {
    DayStatus.PRESENT: "bg-success",
    DayStatus.LATE: "bg-danger",
    DayStatus.ABSENT: "bg-secondary",
}


@dataclass(frozen=True)
class AttendanceRowUI:
    record_id: str
    employee: str
    date: str
    time_in: str
    time_out: str
    hours: str
    late: str
    undertime: str
    status: str
    css_class: str


@dataclass(frozen=True)
class AttendanceTableUI:
    rows: list[AttendanceRowUI]
    pagination: Pagination
    summary: SummaryStats
    unique_employees: int


class AttendanceViewService:
    """Builds attendance table rows for the admin and employee views."""

    def __init__(
        self,
        aggregator: PunchAggregator,
        records: Optional[AttendanceRecordRepository] = None,
        *,
        calculator: Optional[TimeAccountingCalculator] = None,
    ):
        self._aggregator = aggregator
        self._records = records
        self._calculator = calculator or TimeAccountingCalculator()

    def admin_punch_table(
        self,
        filters: PunchFilters,
        *,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        total_employees: Optional[int] = None,
    ) -> AttendanceTableUI:
        result = self._aggregator.fetch_punch_attendance(filters, page, limit)
        records = [AttendanceRecord.from_punch_record(r) for r in result.records]
        employees = result.unique_employees if total_employees is None else total_employees
        return AttendanceTableUI(
            rows=[self._to_ui(r) for r in records],
            pagination=result.pagination,
            summary=calculate_summary_stats(records, employees),
            unique_employees=result.unique_employees,
        )

    def employee_history(
        self,
        user_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 31,
    ) -> list[AttendanceRowUI]:
        if self._records is None:
            filters = PunchFilters(start_date=start_date, end_date=end_date, user_id=user_id)
            punch_records = self._aggregator.fetch_punch_attendance(filters, 1, limit).records
            records = [AttendanceRecord.from_punch_record(r) for r in punch_records]
        else:
            records = list(
                self._records.list_for_user(user_id, start_date=start_date, end_date=end_date, limit=limit)
            )
        return [self._to_ui(r) for r in records]

    def _to_ui(self, r: AttendanceRecord) -> AttendanceRowUI:
        status = get_record_status(r)
        time_in = first_time_in(r)
        time_out = r.time_out or r.afternoon_time_out or r.morning_time_out
        employee = r.user.full_name if r.user else r.user_id

        return AttendanceRowUI(
            record_id=r.record_id or "",
            employee=employee,
            date=r.work_date.strftime("%Y-%m-%d") if r.work_date else EMPTY_DISPLAY,
            time_in=format_time(time_in),
            time_out=format_time(time_out),
            hours=format_hours(r.hours_worked),
            late=self._calculator.calculate_late(r),
            undertime=self._calculator.calculate_undertime(r),
            status=STATUS_LABELS[status],
            css_class=STATUS_CSS[status],
        )
