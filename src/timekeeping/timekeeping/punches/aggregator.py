from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Callable, Iterable, Optional

from ..common.manila_time import manila_minute_of_day, now_utc, utc_midday_iso
from ..core.constants import DEFAULT_PAGE_LIMIT, LATE_GRACE_MINUTES, WORK_START_HOUR
from .model import (
    AttendanceKey,
    Pagination,
    PunchAttendanceAll,
    PunchAttendancePage,
    PunchAttendanceRecord,
    PunchDayRow,
    PunchFilters,
    RowDiagnostic,
    day_key_of,
)
from .repository import PunchRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowOutcome:
    record: PunchAttendanceRecord
    diagnostic: Optional[RowDiagnostic] = None


def round_hours(hours: float) -> float:
    """Round half up to 2 decimals."""
    return math.floor(hours * 100 + 0.5) / 100


def _parse_day(value) -> date:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    raise ValueError(f"Invalid date: {value!r}")


class PunchAggregator:
    """Turns grouped punch rows into one attendance record per (user, Manila day).

    Lateness here is the fixed ``start_hour:00 + grace`` rule, independent of
    the per employee-type schedule used by the time-accounting calculator.
    """

    def __init__(
        self,
        punches: PunchRepository,
        *,
        default_limit: int = DEFAULT_PAGE_LIMIT,
        late_start_hour: int = WORK_START_HOUR,
        late_grace_minutes: int = LATE_GRACE_MINUTES,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._punches = punches
        self._default_limit = int(default_limit)
        self._late_threshold = int(late_start_hour) * 60 + int(late_grace_minutes)
        self._clock = clock

    def fetch_punch_attendance(
        self,
        filters: PunchFilters,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> PunchAttendancePage:
        safe_limit = limit if limit and limit > 0 else self._default_limit
        safe_page = page if page and page > 0 else 1
        skip = (safe_page - 1) * safe_limit

        rows = self._punches.list_day_rows(filters, offset=skip, limit=safe_limit)
        counts = self._punches.count_days(filters)
        records, diagnostics = self._derive(rows)

        pages = math.ceil(counts.total / safe_limit) if safe_limit > 0 else 1
        logger.debug(
            "Punch attendance page %d/%d: %d records, %d total, %d employees",
            safe_page, pages, len(records), counts.total, counts.unique_employees,
        )

        return PunchAttendancePage(
            records=records,
            pagination=Pagination(page=safe_page, limit=safe_limit, total=counts.total, pages=pages),
            unique_employees=counts.unique_employees,
            diagnostics=diagnostics,
        )

    def fetch_all_punch_attendance(self, filters: PunchFilters) -> PunchAttendanceAll:
        rows = self._punches.list_day_rows(filters)
        counts = self._punches.count_days(filters)
        records, diagnostics = self._derive(rows)
        return PunchAttendanceAll(
            records=records,
            unique_employees=counts.unique_employees,
            diagnostics=diagnostics,
        )

    def _derive(self, rows: Iterable[PunchDayRow]) -> tuple[list[PunchAttendanceRecord], list[RowDiagnostic]]:
        records: list[PunchAttendanceRecord] = []
        diagnostics: list[RowDiagnostic] = []
        for row in rows:
            outcome = self.to_attendance_record(row)
            records.append(outcome.record)
            if outcome.diagnostic is not None:
                diagnostics.append(outcome.diagnostic)
        return records, diagnostics

    def to_attendance_record(self, row: PunchDayRow) -> RowOutcome:
        time_in, time_out = row.time_in, row.time_out

        hours_worked = None
        if time_in and time_out and time_out > time_in:
            hours_worked = round_hours((time_out - time_in).total_seconds() / 3600)

        in_minutes = manila_minute_of_day(time_in) if time_in else None
        is_late = in_minutes is not None and in_minutes > self._late_threshold

        key = AttendanceKey(user_id=row.user.user_id, day=day_key_of(row.day))
        diagnostic = None
        try:
            day = _parse_day(row.day)
        except ValueError as exc:
            day = self._clock().astimezone(timezone.utc).date()
            logger.warning("Error parsing date for attendance record %s: %r (%s)", key, row.day, exc)
            diagnostic = RowDiagnostic(record_id=str(key), value=repr(row.day), message=str(exc))

        record = PunchAttendanceRecord(
            key=key,
            date=utc_midday_iso(day),
            time_in=time_in,
            time_out=time_out,
            hours_worked=hours_worked,
            is_late=is_late,
            is_absent=time_in is None,
            user=row.user,
            in_count=row.in_count,
            out_count=row.out_count,
        )
        return RowOutcome(record=record, diagnostic=diagnostic)
