from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRecordRepository(Protocol):
    """Materialized daily records (manual entries, dual-session days)."""

    def list_for_user(
        self,
        user_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 31,
    ) -> Sequence[AttendanceRecord]:
        """Most recent first."""

        raise NotImplementedError
