from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import TimeOffStatus
from .model import TimeOffRequest


class TimeOffRepository(Protocol):
    def create(self, *, user_id: int, start_date: date, end_date: date, reason: str) -> int:
        """Insert a PENDING request and return its id."""

        raise NotImplementedError

    def get_by_id(self, request_id: int) -> Optional[TimeOffRequest]:
        """Return the request joined with its owner's name."""

        raise NotImplementedError

    def list_overlapping(
        self,
        *,
        range_from: date,
        range_to: Optional[date],
        denied_cutoff: date,
        status: Optional[TimeOffStatus] = None,
        order_by: str = "start_date",
    ) -> Sequence[TimeOffRequest]:
        """Requests with start_date <= range_to AND end_date >= range_from.

        DENIED rows whose end_date is before `denied_cutoff` are left out.
        A None `range_to` is open-ended. `order_by` is "start_date" or "created_at".
        """

        raise NotImplementedError

    def update_status(
        self,
        *,
        request_id: int,
        status: TimeOffStatus,
        decided_by: int,
        decided_at: datetime,
    ) -> None:
        raise NotImplementedError

    def delete(self, request_id: int) -> bool:
        raise NotImplementedError
