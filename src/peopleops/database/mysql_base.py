from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.constants import MYSQL_DUPLICATE_ENTRY
from ..core.exceptions import DomainError, DuplicateError, RemoteError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


def translate_error(exc: mysql.connector.Error) -> DomainError:
    """Map a connector error onto the domain error kinds.

    Duplicate-key violations are an expected outcome (e.g. a second check-in
    on the same day), everything else is a remote failure.
    """

    if isinstance(exc, mysql.connector.IntegrityError) and exc.errno == MYSQL_DUPLICATE_ENTRY:
        return DuplicateError(exc.msg or "Duplicate entry")
    return RemoteError("Database operation failed")


def _rollback_quietly(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error:
        logger.warning("Rollback failed", exc_info=True)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise RemoteError("Could not reach the database") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        _rollback_quietly(conn)
        raise translate_error(exc) from exc
    except Exception:
        _rollback_quietly(conn)
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def fetchcount(cur) -> int:
    row = cur.fetchone()
    if not row:
        return 0
    if isinstance(row, dict):
        return int(next(iter(row.values())) or 0)
    return int(row[0] or 0)
