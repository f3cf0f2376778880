from __future__ import annotations

from dataclasses import dataclass

from .accounting.calculator import TimeAccountingCalculator
from .accounting.factory import DeviationStrategyFactory
from .accounting.mysql_record_repository import MySQLAttendanceRecordRepository
from .accounting.service import AttendanceViewService
from .core.constants import DEFAULT_PAGE_LIMIT, LATE_GRACE_MINUTES, WORK_START_HOUR
from .database.connection import DBConfig, DatabaseConnection
from .punches.aggregator import PunchAggregator
from .punches.mysql_punch_repository import MySQLPunchRepository
from .schedules.resolver import ScheduleResolver


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    punches_repo: MySQLPunchRepository
    records_repo: MySQLAttendanceRecordRepository

    schedule_resolver: ScheduleResolver
    punch_aggregator: PunchAggregator
    calculator: TimeAccountingCalculator
    attendance_view_service: AttendanceViewService


def build_container(
    *,
    db_config: dict,
    late_start_hour: int = WORK_START_HOUR,
    late_grace_minutes: int = LATE_GRACE_MINUTES,
    default_page_limit: int = DEFAULT_PAGE_LIMIT,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    punches_repo = MySQLPunchRepository(conn)
    records_repo = MySQLAttendanceRecordRepository(conn)

    schedule_resolver = ScheduleResolver()
    punch_aggregator = PunchAggregator(
        punches_repo,
        default_limit=default_page_limit,
        late_start_hour=late_start_hour,
        late_grace_minutes=late_grace_minutes,
    )
    calculator = TimeAccountingCalculator(schedule_resolver, strategy_factory=DeviationStrategyFactory())
    attendance_view_service = AttendanceViewService(punch_aggregator, records_repo, calculator=calculator)

    return Container(
        conn=conn,
        punches_repo=punches_repo,
        records_repo=records_repo,
        schedule_resolver=schedule_resolver,
        punch_aggregator=punch_aggregator,
        calculator=calculator,
        attendance_view_service=attendance_view_service,
    )
