from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import TimeEntry


class TimeEntryRepository(Protocol):
    def find_open_for_user(self, user_id: int) -> Optional[TimeEntry]:
        """Most recent entry with clock_out NULL (ORDER BY clock_in DESC)."""

        raise NotImplementedError

    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        raise NotImplementedError

    def create_clock_in(self, *, user_id: int, clock_in: datetime, source: str) -> int:
        """Insert an open entry.

        Raises ConflictError when the user already has an open entry.
        """

        raise NotImplementedError

    def close_entry(self, *, entry_id: int, clock_out: datetime) -> bool:
        """Set clock_out on a still-open entry; False when nothing matched."""

        raise NotImplementedError

    def list_since(self, *, user_id: int, since: datetime) -> Sequence[TimeEntry]:
        """Entries with clock_in >= since, ascending by clock_in."""

        raise NotImplementedError
