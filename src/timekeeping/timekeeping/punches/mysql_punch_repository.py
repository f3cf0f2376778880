from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date, normalize_mysql_datetime
from .model import PunchDayCounts, PunchDayRow, PunchFilters, PunchUser
from .repository import PunchRepository

# Manila day key: shift the UTC instant +8h before truncating to a date.
_MANILA_DAY = "DATE(DATE_ADD(ap.punched_at, INTERVAL 8 HOUR))"

_ROW_COLUMNS = """
    pd.user_id, pd.day, pd.time_in, pd.time_out, pd.in_count, pd.out_count,
    u.first_name, u.last_name, u.employee_id, u.department, u.position, u.employee_type
"""

_ORDER_CLAUSE = "ORDER BY pd.day DESC, u.last_name ASC, u.first_name ASC, pd.user_id ASC"


def _naive_utc(value: datetime) -> datetime:
    # Sessions run in UTC; the connector expects naive values.
    return value.replace(tzinfo=None)


class MySQLPunchRepository(PunchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _punch_data_cte(self, filters: PunchFilters) -> tuple[str, list[object]]:
        start, end = filters.time_bounds()
        clauses: list[str] = []
        params: list[object] = []

        if start is not None:
            clauses.append("ap.punched_at >= %s")
            params.append(_naive_utc(start))
        if end is not None:
            clauses.append("ap.punched_at <= %s")
            params.append(_naive_utc(end))
        if filters.user_id:
            clauses.append("ap.user_id = %s")
            params.append(str(filters.user_id))
        if filters.department:
            clauses.append("u.department = %s")
            params.append(str(filters.department))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        cte = f"""
            WITH punch_data AS (
                SELECT
                    ap.user_id AS user_id,
                    {_MANILA_DAY} AS day,
                    MIN(CASE WHEN ap.punch_type = 'IN' THEN ap.punched_at END) AS time_in,
                    MAX(CASE WHEN ap.punch_type = 'OUT' THEN ap.punched_at END) AS time_out,
                    SUM(CASE WHEN ap.punch_type = 'IN' THEN 1 ELSE 0 END) AS in_count,
                    SUM(CASE WHEN ap.punch_type = 'OUT' THEN 1 ELSE 0 END) AS out_count
                FROM attendance_punches ap
                JOIN users u ON u.user_id = ap.user_id
                {where}
                GROUP BY ap.user_id, {_MANILA_DAY}
            )
        """
        return cte, params

    def list_day_rows(
        self,
        filters: PunchFilters,
        *,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> Sequence[PunchDayRow]:
        cte, params = self._punch_data_cte(filters)
        pagination = ""
        if limit is not None:
            pagination = "LIMIT %s OFFSET %s"
            params = [*params, int(limit), max(int(offset), 0)]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {cte}
                SELECT {_ROW_COLUMNS}
                FROM punch_data pd
                JOIN users u ON u.user_id = pd.user_id
                {_ORDER_CLAUSE}
                {pagination}
                """,
                tuple(params),
            )
            rows = fetchall(cur)

        return [
            PunchDayRow(
                user=PunchUser(
                    user_id=str(r["user_id"]),
                    first_name=r["first_name"],
                    last_name=r["last_name"],
                    employee_id=r.get("employee_id"),
                    department=r.get("department"),
                    position=r.get("position"),
                    employee_type=r.get("employee_type"),
                ),
                day=normalize_mysql_date(r["day"]),
                time_in=normalize_mysql_datetime(r.get("time_in")),
                time_out=normalize_mysql_datetime(r.get("time_out")),
                in_count=int(r.get("in_count") or 0),
                out_count=int(r.get("out_count") or 0),
            )
            for r in rows
        ]

    def count_days(self, filters: PunchFilters) -> PunchDayCounts:
        cte, params = self._punch_data_cte(filters)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {cte}
                SELECT COUNT(*) AS total, COUNT(DISTINCT user_id) AS unique_employees
                FROM punch_data
                """,
                tuple(params),
            )
            r = fetchone(cur)

        if not r:
            return PunchDayCounts(total=0, unique_employees=0)
        return PunchDayCounts(total=int(r["total"] or 0), unique_employees=int(r["unique_employees"] or 0))
