from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import PunchDayCounts, PunchDayRow, PunchFilters


class PunchRepository(Protocol):
    """Grouped, read-only view over the punch log.

    Implementations group punches by (user, Manila day) with the earliest IN
    as ``time_in`` and the latest OUT as ``time_out``, and order rows by day
    descending, then last name, first name and user id ascending.
    """

    def list_day_rows(
        self,
        filters: PunchFilters,
        *,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> Sequence[PunchDayRow]:
        raise NotImplementedError

    def count_days(self, filters: PunchFilters) -> PunchDayCounts:
        raise NotImplementedError
