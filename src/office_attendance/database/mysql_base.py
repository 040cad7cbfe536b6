from __future__ import annotations

from contextlib import contextmanager, suppress
from datetime import datetime, time, timedelta, timezone
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import DuplicateSessionError, StoreTimeout, StoreUnavailable
from ..core.logging import get_logger
from .connection import DatabaseConnection

logger = get_logger(__name__)

ER_DUP_ENTRY = 1062
ER_LOCK_WAIT_TIMEOUT = 1205
ER_QUERY_TIMEOUT = 3024
CR_SERVER_LOST = 2013

CONNECTION_ERRNOS = {
    2002,  # CR_CONNECTION_ERROR
    2003,  # CR_CONN_HOST_ERROR
    2005,  # CR_UNKNOWN_HOST
    2006,  # CR_SERVER_GONE_ERROR
    2055,  # CR_SERVER_LOST_EXTENDED
    1040,  # ER_CON_COUNT_ERROR
}
TIMEOUT_ERRNOS = {ER_LOCK_WAIT_TIMEOUT, ER_QUERY_TIMEOUT, CR_SERVER_LOST}


def translate_error(exc: mysql.connector.Error) -> Exception:
    """Map driver errors onto the store taxonomy; unknown errors are returned unchanged."""
    errno = getattr(exc, "errno", None)
    if isinstance(exc, mysql.connector.IntegrityError) and errno == ER_DUP_ENTRY:
        return DuplicateSessionError(str(exc))
    if errno in TIMEOUT_ERRNOS:
        return StoreTimeout(str(exc))
    if errno in CONNECTION_ERRNOS or isinstance(exc, mysql.connector.InterfaceError):
        return StoreUnavailable(str(exc))
    return exc


def _raise_translated(exc: mysql.connector.Error) -> None:
    mapped = translate_error(exc)
    if mapped is exc:
        raise exc
    if not isinstance(mapped, DuplicateSessionError):
        logger.warning("Store failure (errno=%s): %s", getattr(exc, "errno", None), exc)
    raise mapped from exc


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        _raise_translated(exc)

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        # The connection may already be gone; the original error is what matters.
        with suppress(mysql.connector.Error):
            conn.rollback()
        _raise_translated(exc)
    except Exception:
        conn.rollback()
        raise
    finally:
        with suppress(mysql.connector.Error):
            conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def to_db_datetime(value: Optional[datetime]) -> Optional[datetime]:
    """DATETIME columns hold naive UTC."""
    if value is None:
        return None
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def from_db_datetime(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def normalize_mysql_time(value: Any) -> Optional[time]:
    """TIME columns arrive as time, timedelta (C extension) or "HH:MM[:SS]" strings."""
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        seconds = int(value.total_seconds()) % 86400
        return time(seconds // 3600, seconds % 3600 // 60, seconds % 60)
    if isinstance(value, str):
        try:
            return time.fromisoformat(value.strip())
        except ValueError:
            raise ValueError(f"Invalid time string: {value!r}") from None
    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
