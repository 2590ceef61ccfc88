from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..common.datetime_utils import TimeOfDay
from ..core.exceptions import DomainError, RepositoryError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Connection + cursor for one unit of work: commit on success, rollback on error.

    Connector failures surface as RepositoryError; DomainError raised inside the
    block (e.g. a duplicate open session) passes through unchanged.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise RepositoryError(f"Database unavailable: {e.msg}") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except DomainError:
        conn.rollback()
        raise
    except mysql.connector.Error as e:
        conn.rollback()
        raise RepositoryError(f"Database error: {e.msg}") from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def is_duplicate_key(error: mysql.connector.Error) -> bool:
    return getattr(error, "errno", None) == errorcode.ER_DUP_ENTRY


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_time(value: Any) -> Optional[TimeOfDay]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return TimeOfDay.from_time(value)

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        return TimeOfDay(total_seconds // 60)

    if isinstance(value, str):
        return TimeOfDay.parse(value)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
