from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import TimeEntry
from .repository import TimeEntryRepository

_ENTRY_COLUMNS = "entry_id, user_id, clock_in, clock_out, source"


def _to_entry(r: dict) -> TimeEntry:
    return TimeEntry(
        entry_id=int(r["entry_id"]),
        user_id=int(r["user_id"]),
        clock_in=r["clock_in"],
        clock_out=r.get("clock_out"),
        source=r.get("source") or "web",
    )


class MySQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_open_for_user(self, user_id: int) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_ENTRY_COLUMNS}
                FROM time_entries
                WHERE user_id=%s AND clock_out IS NULL
                ORDER BY clock_in DESC
                LIMIT 1
                """,
                (int(user_id),),
            )
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_ENTRY_COLUMNS} FROM time_entries WHERE entry_id=%s", (int(entry_id),))
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def create_clock_in(self, *, user_id: int, clock_in: datetime, source: str) -> int:
        # uq_time_entries_one_open turns a concurrent second clock-in into ConflictError.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO time_entries(user_id, clock_in, source) VALUES(%s,%s,%s)",
                (int(user_id), clock_in, source),
            )
            return int(cur.lastrowid)

    def close_entry(self, *, entry_id: int, clock_out: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_entries
                SET clock_out=%s
                WHERE entry_id=%s AND clock_out IS NULL
                """,
                (clock_out, int(entry_id)),
            )
            return cur.rowcount > 0

    def list_since(self, *, user_id: int, since: datetime) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_ENTRY_COLUMNS}
                FROM time_entries
                WHERE user_id=%s AND clock_in >= %s
                ORDER BY clock_in ASC
                """,
                (int(user_id), since),
            )
            return [_to_entry(r) for r in fetchall(cur)]
