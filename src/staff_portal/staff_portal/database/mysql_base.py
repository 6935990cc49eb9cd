from __future__ import annotations

from contextlib import contextmanager, suppress
from typing import Any, Dict, List, Optional

from mysql.connector import errorcode, errors

from ..core.exceptions import ConflictError, StoreUnavailableError
from .connection import DatabaseConnection


def _translate(exc: errors.Error) -> Exception:
    if isinstance(exc, errors.IntegrityError) and exc.errno == errorcode.ER_DUP_ENTRY:
        return ConflictError(exc.msg or "Duplicate entry")
    return StoreUnavailableError(f"Record store error: {exc}")


def _quietly(action) -> None:
    # Used on cleanup paths only: a dead connection fails here too, and the error in flight wins.
    with suppress(errors.Error):
        action()


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor) on a fresh connection, committing on success.

    mysql-connector errors surface as ConflictError (duplicate key) or
    StoreUnavailableError (everything else).
    """
    try:
        conn = conn_factory.connect()
    except errors.Error as exc:
        raise StoreUnavailableError(f"Cannot connect to record store: {exc}") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except errors.Error as exc:
        _quietly(conn.rollback)
        raise _translate(exc) from exc
    except Exception:
        _quietly(conn.rollback)
        raise
    finally:
        _quietly(conn.close)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
