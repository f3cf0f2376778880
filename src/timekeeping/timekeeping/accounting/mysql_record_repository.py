from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_date, normalize_mysql_datetime
from ..punches.model import PunchUser
from .model import AttendanceRecord
from .repository import AttendanceRecordRepository

_SELECT = """
    SELECT
        ar.record_id, ar.user_id, ar.work_date,
        ar.time_in, ar.time_out,
        ar.morning_time_in, ar.morning_time_out, ar.afternoon_time_in, ar.afternoon_time_out,
        ar.hours_worked, ar.is_late, ar.is_absent, ar.late_minutes, ar.undertime_minutes, ar.status,
        u.first_name, u.last_name, u.employee_id, u.department, u.position, u.employee_type
    FROM attendance_records ar
    JOIN users u ON u.user_id = ar.user_id
"""


def _to_record(r: dict) -> AttendanceRecord:
    user = PunchUser(
        user_id=str(r["user_id"]),
        first_name=r["first_name"],
        last_name=r["last_name"],
        employee_id=r.get("employee_id"),
        department=r.get("department"),
        position=r.get("position"),
        employee_type=r.get("employee_type"),
    )
    hours = r.get("hours_worked")
    return AttendanceRecord(
        record_id=str(r["record_id"]),
        user_id=str(r["user_id"]),
        work_date=normalize_mysql_date(r["work_date"]),
        time_in=normalize_mysql_datetime(r.get("time_in")),
        time_out=normalize_mysql_datetime(r.get("time_out")),
        morning_time_in=normalize_mysql_datetime(r.get("morning_time_in")),
        morning_time_out=normalize_mysql_datetime(r.get("morning_time_out")),
        afternoon_time_in=normalize_mysql_datetime(r.get("afternoon_time_in")),
        afternoon_time_out=normalize_mysql_datetime(r.get("afternoon_time_out")),
        hours_worked=float(hours) if hours is not None else None,
        is_late=bool(r.get("is_late")),
        is_absent=bool(r.get("is_absent")),
        late_minutes=r.get("late_minutes"),
        undertime_minutes=r.get("undertime_minutes"),
        status=str(r.get("status") or ""),
        employee_type=user.employee_type,
        user=user,
    )


class MySQLAttendanceRecordRepository(AttendanceRecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(
        self,
        user_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 31,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["ar.user_id=%s"]
        params: list[object] = [str(user_id)]
        if start_date is not None:
            clauses.append("ar.work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("ar.work_date <= %s")
            params.append(end_date)
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                WHERE {" AND ".join(clauses)}
                ORDER BY ar.work_date DESC
                LIMIT %s
                """,
                tuple(params),
            )
            rows = fetchall(cur)
        return [_to_record(r) for r in rows]
