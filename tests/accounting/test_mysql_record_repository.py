from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

from src.timekeeping.timekeeping.accounting.calculator import TimeAccountingCalculator
from src.timekeeping.timekeeping.accounting.mysql_record_repository import MySQLAttendanceRecordRepository

UTC = timezone.utc


class FakeCursor:
    def __init__(self, rows):
        self._rows = rows
        self.executed = []

    def execute(self, sql, params=()):
        self.executed.append((sql, params))

    def fetchall(self):
        return self._rows

    def close(self):
        pass


class FakeConnFactory:
    def __init__(self, cursor):
        self._cursor = cursor

    def connect(self):
        cursor = self._cursor

        class _Conn:
            def cursor(self, dictionary=False):
                return cursor

            def commit(self):
                pass

            def rollback(self):
                pass

            def close(self):
                pass

        return _Conn()


ROW = {
    "record_id": 11,
    "user_id": "A",
    "work_date": date(2024, 3, 4),
    "time_in": None,
    "time_out": None,
    "morning_time_in": datetime(2024, 3, 4, 0, 10),
    "morning_time_out": datetime(2024, 3, 4, 4, 0),
    "afternoon_time_in": datetime(2024, 3, 4, 5, 0),
    "afternoon_time_out": datetime(2024, 3, 4, 8, 30),
    "hours_worked": Decimal("7.33"),
    "is_late": 1,
    "is_absent": 0,
    "late_minutes": None,
    "undertime_minutes": None,
    "status": "APPROVED",
    "first_name": "Tess",
    "last_name": "Santos",
    "employee_id": "E-9",
    "department": "Faculty",
    "position": "Instructor",
    "employee_type": "TEACHING_PERSONNEL",
}


def test_list_for_user_maps_dual_session_rows():
    cur = FakeCursor([ROW])
    repo = MySQLAttendanceRecordRepository(FakeConnFactory(cur))

    (record,) = repo.list_for_user("A", start_date=date(2024, 3, 1), end_date=date(2024, 3, 31), limit=5)

    sql, params = cur.executed[0]
    assert "ar.work_date >= %s" in sql
    assert "ORDER BY ar.work_date DESC" in sql
    assert params == ("A", date(2024, 3, 1), date(2024, 3, 31), 5)

    assert record.record_id == "11"
    assert record.morning_time_in == datetime(2024, 3, 4, 0, 10, tzinfo=UTC)
    assert record.hours_worked == 7.33
    assert record.is_late is True
    assert record.employee_type == "TEACHING_PERSONNEL"

    # 08:10 against 07:30, 13:00 against 12:30; out 12:00 vs 11:30 and 16:30 on the dot.
    calc = TimeAccountingCalculator()
    assert calc.calculate_late(record) == "1h 10m"
    assert calc.calculate_undertime(record) == "-"
