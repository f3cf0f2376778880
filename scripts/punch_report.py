"""Print punch-derived attendance as JSON.

Reads the configured MySQL database, or a JSON export when ``--from-file`` is
given (``{"users": [...], "punches": [{"userId", "timestamp", "type"}]}``).

    python scripts/punch_report.py --start 2024-03-01 --end 2024-03-31 --department HR
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.timekeeping.timekeeping.accounting.calculator import TimeAccountingCalculator
from src.timekeeping.timekeeping.accounting.model import AttendanceRecord
from src.timekeeping.timekeeping.common.manila_time import parse_manila_local
from src.timekeeping.timekeeping.main import configure_logging, create_container, load_settings
from src.timekeeping.timekeeping.punches.aggregator import PunchAggregator
from src.timekeeping.timekeeping.punches.memory_punch_repository import InMemoryPunchRepository, punches_from_dicts
from src.timekeeping.timekeeping.punches.model import PunchFilters, PunchUser


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--start", help="Manila start day, YYYY-MM-DD")
    parser.add_argument("--end", help="Manila end day, YYYY-MM-DD")
    parser.add_argument("--user-id")
    parser.add_argument("--department")
    parser.add_argument("--page", type=int)
    parser.add_argument("--limit", type=int)
    parser.add_argument("--from-file", type=Path, help="JSON export of users and punches")
    parser.add_argument("--env", help="settings environment, overrides APP_ENV")
    return parser.parse_args(argv)


def _aggregator_from_file(path: Path, settings) -> PunchAggregator:
    data = json.loads(path.read_text(encoding="utf-8"))
    users = [
        PunchUser(
            user_id=str(u["id"]),
            first_name=u.get("firstName", ""),
            last_name=u.get("lastName", ""),
            employee_id=u.get("employeeId"),
            department=u.get("department"),
            position=u.get("position"),
            employee_type=u.get("employeeType"),
        )
        for u in data.get("users", [])
    ]
    repo = InMemoryPunchRepository(users, punches_from_dicts(data.get("punches", [])))
    return PunchAggregator(
        repo,
        default_limit=int(getattr(settings, "DEFAULT_PAGE_LIMIT", 10)),
        late_start_hour=int(getattr(settings, "LATE_START_HOUR", 8)),
        late_grace_minutes=int(getattr(settings, "LATE_GRACE_MINUTES", 15)),
    )


def main(argv=None) -> None:
    args = _parse_args(argv)

    if args.from_file:
        settings = load_settings(env=args.env)
        configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
        aggregator = _aggregator_from_file(args.from_file, settings)
        calculator = TimeAccountingCalculator()
    else:
        container = create_container(env=args.env)
        aggregator = container.punch_aggregator
        calculator = container.calculator

    start = parse_manila_local(args.start) if args.start else None
    end = parse_manila_local(args.end) if args.end else None
    if (args.start and start is None) or (args.end and end is None):
        raise SystemExit("Dates must be YYYY-MM-DD")

    filters = PunchFilters(
        start_date=start,
        end_date=end,
        user_id=args.user_id,
        department=args.department,
    )

    if args.page or args.limit:
        result = aggregator.fetch_punch_attendance(filters, args.page, args.limit)
        payload = {"pagination": vars(result.pagination), "uniqueEmployees": result.unique_employees}
    else:
        result = aggregator.fetch_all_punch_attendance(filters)
        payload = {"uniqueEmployees": result.unique_employees}

    rows = []
    for record in result.records:
        row = record.to_dict()
        day = AttendanceRecord.from_punch_record(record)
        row["late"] = calculator.calculate_late(day)
        row["undertime"] = calculator.calculate_undertime(day)
        rows.append(row)

    payload["records"] = rows
    payload["diagnostics"] = [vars(d) for d in result.diagnostics]
    print(json.dumps(payload, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
