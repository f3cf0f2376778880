"""Manila (UTC+8) time helpers.

Contract:
- Instants are timezone-aware ``datetime`` values in UTC. Naive datetimes and
  ISO strings without an offset are taken as UTC, numbers as epoch milliseconds.
- Manila wall-clock reads and writes go through the fixed +8h offset below,
  never through the process-local timezone. The Philippines has no DST.
- Invalid input never raises: functions return ``None`` (instants, numbers)
  or ``""`` (strings) and callers check before use.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo

from ..core.constants import LATE_GRACE_MINUTES, MANILA_OFFSET_HOURS, MANILA_TZ_ID, WORK_START_HOUR

InstantLike = Union[datetime, date, str, int, float]

MANILA_OFFSET = timedelta(hours=MANILA_OFFSET_HOURS)
MANILA_ZONE = ZoneInfo(MANILA_TZ_ID)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_DAY = timedelta(days=1)
_ONE_MS = timedelta(milliseconds=1)


@dataclass(frozen=True)
class ManilaWallClock:
    """Calendar date and time as shown on a clock in Manila."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int = 0
    millisecond: int = 0

    @property
    def date_key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    @property
    def minute_of_day(self) -> int:
        return self.hour * 60 + self.minute

    def isoformat(self) -> str:
        return (
            f"{self.date_key}T{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
            f".{self.millisecond:03d}+08:00"
        )


def now_utc() -> datetime:
    """Current instant.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc)


def to_instant(value: Optional[InstantLike]) -> Optional[datetime]:
    """Normalize supported inputs to an aware UTC datetime, ``None`` if invalid."""

    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        try:
            return value.astimezone(timezone.utc)
        except (OverflowError, ValueError):
            return None

    if isinstance(value, date):
        return datetime.combine(value, time(0, 0), tzinfo=timezone.utc)

    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        try:
            return _EPOCH + timedelta(milliseconds=value)
        except OverflowError:
            return None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text[-1] in ("Z", "z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        return to_instant(parsed)

    return None


def to_manila(value: Optional[InstantLike]) -> Optional[ManilaWallClock]:
    instant = to_instant(value)
    if instant is None:
        return None
    try:
        shifted = instant + MANILA_OFFSET
    except OverflowError:
        return None
    return ManilaWallClock(
        year=shifted.year,
        month=shifted.month,
        day=shifted.day,
        hour=shifted.hour,
        minute=shifted.minute,
        second=shifted.second,
        millisecond=shifted.microsecond // 1000,
    )


def to_manila_date_key(value: Optional[InstantLike]) -> str:
    """Manila calendar day of an instant as ``YYYY-MM-DD`` (``""`` when invalid)."""

    wall = to_manila(value)
    return wall.date_key if wall else ""


def from_manila_parts_to_utc(
    year: int,
    month: int,
    day: int,
    hours: int = 0,
    minutes: int = 0,
    seconds: int = 0,
    ms: int = 0,
) -> Optional[datetime]:
    """UTC instant for a Manila wall-clock time.

    ``month`` is 1-12. Out-of-range parts roll over into the neighbouring
    unit (day 0 is the last day of the previous month, hour -1 is 23:00 the
    day before, and so on). Returns ``None`` when the result is unrepresentable.
    """

    try:
        year_index, month_index = divmod(int(year) * 12 + int(month) - 1, 12)
        base = datetime(year_index, month_index + 1, 1, tzinfo=timezone.utc)
        return base + timedelta(
            days=int(day) - 1,
            hours=int(hours) - MANILA_OFFSET_HOURS,
            minutes=int(minutes),
            seconds=int(seconds),
            milliseconds=int(ms),
        )
    except (OverflowError, TypeError, ValueError):
        return None


def manila_start_of_day_utc(value: Optional[InstantLike]) -> Optional[datetime]:
    """UTC instant of 00:00:00.000 Manila on the instant's Manila day."""

    wall = to_manila(value)
    if wall is None:
        return None
    return from_manila_parts_to_utc(wall.year, wall.month, wall.day)


def manila_end_of_day_utc(value: Optional[InstantLike]) -> Optional[datetime]:
    """UTC instant of 23:59:59.999 Manila on the instant's Manila day."""

    start = manila_start_of_day_utc(value)
    if start is None:
        return None
    try:
        return start + _ONE_DAY - _ONE_MS
    except OverflowError:
        return None


def get_manila_hours(value: Optional[InstantLike]) -> Optional[int]:
    wall = to_manila(value)
    return wall.hour if wall else None


def get_manila_minutes(value: Optional[InstantLike]) -> Optional[int]:
    wall = to_manila(value)
    return wall.minute if wall else None


def manila_minute_of_day(value: Optional[InstantLike]) -> Optional[int]:
    wall = to_manila(value)
    return wall.minute_of_day if wall else None


def is_late_in_manila(
    value: Optional[InstantLike],
    start_hour: int = WORK_START_HOUR,
    grace_minutes: int = LATE_GRACE_MINUTES,
) -> bool:
    """True if the Manila time is strictly after ``start_hour:grace_minutes``."""

    wall = to_manila(value)
    if wall is None:
        return False
    return wall.hour > start_hour or (wall.hour == start_hour and wall.minute > grace_minutes)


def format_manila(value: Optional[InstantLike], fmt: str = "%b %d, %Y, %I:%M %p") -> str:
    """Format an instant for display in the Asia/Manila zone."""

    instant = to_instant(value)
    if instant is None:
        return ""
    try:
        return instant.astimezone(MANILA_ZONE).strftime(fmt)
    except (OverflowError, ValueError):
        return ""


def format_manila_iso(value: Optional[InstantLike]) -> str:
    """``YYYY-MM-DDTHH:MM:SS.mmm+08:00``; the offset is always explicit, never ``Z``."""

    wall = to_manila(value)
    return wall.isoformat() if wall else ""


def parse_manila_local(text: str) -> Optional[datetime]:
    """Parse ``YYYY-MM-DD`` or ``YYYY-MM-DDTHH:MM`` as Manila time; time defaults to 00:00."""

    if not isinstance(text, str):
        return None

    date_part, _, time_part = text.strip().partition("T")
    try:
        year, month, day = (int(p) for p in date_part.split("-"))
        hours = minutes = 0
        if time_part:
            pieces = time_part.split(":")
            if len(pieces) < 2:
                return None
            hours, minutes = int(pieces[0]), int(pieces[1])
    except ValueError:
        return None

    return from_manila_parts_to_utc(year, month, day, hours, minutes)


def to_utc_iso(value: Optional[InstantLike]) -> str:
    """``YYYY-MM-DDTHH:MM:SS.mmmZ`` rendering of an instant (``""`` when invalid)."""

    instant = to_instant(value)
    if instant is None:
        return ""
    return instant.strftime("%Y-%m-%dT%H:%M:%S.") + f"{instant.microsecond // 1000:03d}Z"


def utc_midday_iso(day: date) -> str:
    """Render a calendar day at 12:00 UTC so any viewer timezone keeps the same date."""

    return f"{day.isoformat()}T12:00:00.000Z"
