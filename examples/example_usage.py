"""Ví dụ: dùng service layer trực tiếp (không cần database).

Builds an in-memory punch log, then prints the admin table rows.
"""

from src.timekeeping.timekeeping.accounting.service import AttendanceViewService
from src.timekeeping.timekeeping.common.manila_time import from_manila_parts_to_utc
from src.timekeeping.timekeeping.core.enums import PunchType
from src.timekeeping.timekeeping.punches.aggregator import PunchAggregator
from src.timekeeping.timekeeping.punches.memory_punch_repository import InMemoryPunchRepository
from src.timekeeping.timekeeping.punches.model import Punch, PunchFilters, PunchUser


def main():
    users = [
        PunchUser(user_id="1", first_name="Maria", last_name="Santos", employee_type="TEACHING_PERSONNEL"),
        PunchUser(user_id="2", first_name="Jose", last_name="Rizal", employee_type="NON_TEACHING_PERSONNEL"),
    ]
    repo = InMemoryPunchRepository(users)
    for user_id, (h_in, m_in), (h_out, m_out) in [("1", (7, 42), (16, 30)), ("2", (8, 20), (16, 45))]:
        repo.record_punch(Punch(user_id, from_manila_parts_to_utc(2024, 3, 4, h_in, m_in), PunchType.IN))
        repo.record_punch(Punch(user_id, from_manila_parts_to_utc(2024, 3, 4, h_out, m_out), PunchType.OUT))

    service = AttendanceViewService(PunchAggregator(repo))
    table = service.admin_punch_table(PunchFilters(start_date="2024-03-04", end_date="2024-03-04"))
    for row in table.rows:
        print(row)
    print(table.summary)


if __name__ == "__main__":
    main()
