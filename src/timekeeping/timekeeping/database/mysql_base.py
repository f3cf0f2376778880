from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import DataSourceError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)``; driver errors surface as ``DataSourceError``."""

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise DataSourceError(f"Cannot connect to attendance store: {exc}") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        conn.rollback()
        raise DataSourceError(f"Attendance store query failed: {exc}") from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_datetime(value: Any) -> Optional[datetime]:
    """Normalize MySQL DATETIME values to aware UTC datetimes.

    Sessions run with ``time_zone='+00:00'`` so naive values are UTC. Some
    connector builds hand back strings (e.g. '2024-03-04 00:05:00').
    """

    if value is None:
        return None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, str):
        parsed = datetime.fromisoformat(value.strip())
        return normalize_mysql_datetime(parsed)

    raise TypeError(f"Unsupported MySQL DATETIME value type: {type(value)!r}")


def normalize_mysql_date(value: Any) -> Any:
    """Return MySQL DATE values as ``date``; anything unparseable is passed through as-is."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return value
    return value
