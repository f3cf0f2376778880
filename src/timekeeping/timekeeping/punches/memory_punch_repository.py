from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.manila_time import to_instant, to_manila_date_key
from ..core.enums import PunchType
from .model import Punch, PunchDayCounts, PunchDayRow, PunchFilters, PunchUser
from .repository import PunchRepository

logger = logging.getLogger(__name__)


class InMemoryPunchRepository(PunchRepository):
    """Groups punches in Python. Used for imports, tests and small deployments."""

    def __init__(self, users: Iterable[PunchUser] = (), punches: Iterable[Punch] = ()):
        self._users: dict[str, PunchUser] = {u.user_id: u for u in users}
        self._punches: list[Punch] = list(punches)

    def record_punch(self, punch: Punch) -> None:
        self._punches.append(punch)

    def list_day_rows(
        self,
        filters: PunchFilters,
        *,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> Sequence[PunchDayRow]:
        rows = self._group(filters)
        start = max(int(offset), 0)
        if limit is None:
            return rows[start:]
        return rows[start:start + int(limit)]

    def count_days(self, filters: PunchFilters) -> PunchDayCounts:
        rows = self._group(filters)
        return PunchDayCounts(total=len(rows), unique_employees=len({r.user.user_id for r in rows}))

    def _group(self, filters: PunchFilters) -> list[PunchDayRow]:
        start, end = filters.time_bounds()
        groups: dict[tuple[str, str], dict] = {}

        for punch in self._punches:
            user = self._users.get(punch.user_id)
            if user is None:
                continue
            if filters.user_id and punch.user_id != filters.user_id:
                continue
            if filters.department and user.department != filters.department:
                continue

            ts = to_instant(punch.timestamp)
            if ts is None:
                continue
            if start is not None and ts < start:
                continue
            if end is not None and ts > end:
                continue

            day = to_manila_date_key(ts)
            if not day:
                continue

            g = groups.setdefault(
                (punch.user_id, day),
                {"user": user, "time_in": None, "time_out": None, "in_count": 0, "out_count": 0},
            )
            if PunchType(punch.punch_type) == PunchType.IN:
                g["in_count"] += 1
                if g["time_in"] is None or ts < g["time_in"]:
                    g["time_in"] = ts
            else:
                g["out_count"] += 1
                if g["time_out"] is None or ts > g["time_out"]:
                    g["time_out"] = ts

        rows = [
            PunchDayRow(
                user=g["user"],
                day=date.fromisoformat(day),
                time_in=g["time_in"],
                time_out=g["time_out"],
                in_count=g["in_count"],
                out_count=g["out_count"],
            )
            for (_, day), g in groups.items()
        ]
        rows.sort(key=lambda r: (r.user.last_name, r.user.first_name, r.user.user_id))
        rows.sort(key=lambda r: r.day, reverse=True)
        return rows


def punches_from_dicts(items: Iterable[dict]) -> list[Punch]:
    """Build punches from ``{"userId", "timestamp", "type"}`` dicts (the export format)."""

    out: list[Punch] = []
    for item in items:
        ts = to_instant(item.get("timestamp"))
        if not isinstance(ts, datetime):
            logger.warning("Skipping punch with invalid timestamp: %r", item.get("timestamp"))
            continue
        user_id = item.get("userId")
        if user_id in (None, ""):
            logger.warning("Skipping punch without userId: %r", item)
            continue
        try:
            punch_type = PunchType(str(item.get("type") or "").upper())
        except ValueError:
            logger.warning("Skipping punch with invalid type: %r", item.get("type"))
            continue
        out.append(Punch(user_id=str(user_id), timestamp=ts, punch_type=punch_type))
    return out
