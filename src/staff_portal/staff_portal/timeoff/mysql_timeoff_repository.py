from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import TimeOffStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import TimeOffRequest
from .repository import TimeOffRepository

_SELECT = """
    SELECT r.request_id, r.user_id, u.name AS user_name, r.reason, r.status,
           r.start_date, r.end_date, r.created_at, r.decided_by, r.decided_at
    FROM time_off_requests r
    JOIN users u ON u.user_id = r.user_id
"""

_ORDERINGS = {
    "start_date": "r.start_date ASC, r.request_id ASC",
    "created_at": "r.created_at ASC, r.request_id ASC",
}


def _to_request(r: dict) -> TimeOffRequest:
    return TimeOffRequest(
        request_id=int(r["request_id"]),
        user_id=int(r["user_id"]),
        user_name=r.get("user_name"),
        reason=r["reason"],
        status=TimeOffStatus(r["status"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        created_at=r["created_at"],
        decided_by=r.get("decided_by"),
        decided_at=r.get("decided_at"),
    )


class MySQLTimeOffRepository(TimeOffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, user_id: int, start_date: date, end_date: date, reason: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_off_requests(user_id, reason, status, start_date, end_date)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(user_id), reason, TimeOffStatus.PENDING.value, start_date, end_date),
            )
            return int(cur.lastrowid)

    def get_by_id(self, request_id: int) -> Optional[TimeOffRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE r.request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def list_overlapping(
        self,
        *,
        range_from: date,
        range_to: Optional[date],
        denied_cutoff: date,
        status: Optional[TimeOffStatus] = None,
        order_by: str = "start_date",
    ) -> Sequence[TimeOffRequest]:
        clauses = ["r.end_date >= %s", "NOT (r.status = %s AND r.end_date < %s)"]
        params: list[object] = [range_from, TimeOffStatus.DENIED.value, denied_cutoff]

        if range_to is not None:
            clauses.append("r.start_date <= %s")
            params.append(range_to)
        if status is not None:
            clauses.append("r.status = %s")
            params.append(status.value)

        where = " AND ".join(clauses)
        order = _ORDERINGS.get(order_by, _ORDERINGS["start_date"])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE {where} ORDER BY {order}", tuple(params))
            return [_to_request(r) for r in fetchall(cur)]

    def update_status(
        self,
        *,
        request_id: int,
        status: TimeOffStatus,
        decided_by: int,
        decided_at: datetime,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_off_requests
                SET status=%s, decided_by=%s, decided_at=%s
                WHERE request_id=%s
                """,
                (status.value, int(decided_by), decided_at, int(request_id)),
            )

    def delete(self, request_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM time_off_requests WHERE request_id=%s", (int(request_id),))
            return cur.rowcount > 0
