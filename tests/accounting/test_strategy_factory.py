from datetime import date

from src.timekeeping.timekeeping.accounting.factory import DeviationKind, DeviationStrategyFactory
from src.timekeeping.timekeeping.accounting.model import AttendanceRecord
from src.timekeeping.timekeeping.accounting.strategies.base import precomputed_minutes
from src.timekeeping.timekeeping.accounting.strategies.late_strategy import LateStrategy
from src.timekeeping.timekeeping.accounting.strategies.undertime_strategy import UndertimeStrategy
from src.timekeeping.timekeeping.common.manila_time import from_manila_parts_to_utc
from src.timekeeping.timekeeping.schedules.model import ScheduleMinutes

SCHEDULE = ScheduleMinutes(480, 720, 780, 1020)


def test_factory_picks_strategy_per_kind():
    factory = DeviationStrategyFactory()

    assert isinstance(factory.for_late(), LateStrategy)
    assert isinstance(factory.for_undertime(), UndertimeStrategy)
    assert isinstance(factory.for_kind("late"), LateStrategy)
    assert isinstance(factory.for_kind(DeviationKind.UNDERTIME), UndertimeStrategy)


def test_strategies_never_go_negative():
    record = AttendanceRecord(
        user_id="A",
        work_date=date(2024, 3, 4),
        morning_time_in=from_manila_parts_to_utc(2024, 3, 4, 7, 0),
        afternoon_time_out=from_manila_parts_to_utc(2024, 3, 4, 19, 0),
    )

    assert LateStrategy().minutes(record, SCHEDULE) == 0
    assert UndertimeStrategy().minutes(record, SCHEDULE) == 0


def test_precomputed_minutes():
    assert precomputed_minutes(15) == 15
    assert precomputed_minutes(15.0) == 15
    assert precomputed_minutes(" 7 ") == 7
    assert precomputed_minutes(0) == 0
    assert precomputed_minutes(None) is None
    assert precomputed_minutes(True) is None
    assert precomputed_minutes(-1) is None
    assert precomputed_minutes(1.5) is None
