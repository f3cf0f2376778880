import pytest

from src.timekeeping.timekeeping.core.exceptions import ValidationError
from src.timekeeping.timekeeping.schedules.model import AttendanceSchedule, ScheduleMinutes
from src.timekeeping.timekeeping.schedules.resolver import (
    DEFAULT_SCHEDULE,
    NON_TEACHING_SCHEDULE,
    TEACHING_SCHEDULE,
    ScheduleResolver,
    get_schedule_for_employee_type,
    get_schedule_in_minutes,
    minutes_to_time,
    time_to_minutes,
)


def test_teaching_personnel_gets_early_schedule():
    assert get_schedule_for_employee_type("TEACHING_PERSONNEL") == TEACHING_SCHEDULE
    assert get_schedule_in_minutes("teaching_personnel") == ScheduleMinutes(450, 690, 750, 990)


@pytest.mark.parametrize("employee_type", ["NON_TEACHING_PERSONNEL", "CASUAL_PLANTILLA", "casual_plantilla"])
def test_non_teaching_types(employee_type):
    assert get_schedule_for_employee_type(employee_type) == NON_TEACHING_SCHEDULE


@pytest.mark.parametrize("employee_type", [None, "", "CONTRACTOR"])
def test_unknown_types_fall_back_to_default(employee_type):
    assert get_schedule_for_employee_type(employee_type) == DEFAULT_SCHEDULE
    assert get_schedule_in_minutes(employee_type) == ScheduleMinutes(480, 720, 780, 1020)


def test_time_conversions():
    assert time_to_minutes("07:30") == 450
    assert time_to_minutes("00:00") == 0
    assert minutes_to_time(450) == "07:30"
    assert minutes_to_time(1020) == "17:00"


@pytest.mark.parametrize("value", ["7", "24:00", "08:60", "ab:cd", ""])
def test_time_to_minutes_rejects_bad_strings(value):
    with pytest.raises(ValidationError):
        time_to_minutes(value)


def test_custom_resolver_mapping_and_default():
    night = AttendanceSchedule("22:00", "23:30", "23:45", "23:59")
    resolver = ScheduleResolver({"security": night}, default=TEACHING_SCHEDULE)

    assert resolver.get_schedule("SECURITY") == night
    assert resolver.get_schedule_in_minutes("Security").morning_start == 22 * 60
    assert resolver.get_schedule("TEACHING_PERSONNEL") == TEACHING_SCHEDULE
    assert resolver.get_schedule(None) == TEACHING_SCHEDULE


def test_custom_resolver_validates_boundaries():
    with pytest.raises(ValidationError):
        ScheduleResolver({"broken": AttendanceSchedule("8am", "12:00", "13:00", "17:00")})
