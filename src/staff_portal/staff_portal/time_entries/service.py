from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from ..common.datetime_utils import local_midnight, now_local, subtract_months
from ..common.validators import require_id
from ..core.constants import DEFAULT_ENTRY_SOURCE, ENTRY_HISTORY_MONTHS
from ..core.exceptions import AlreadyClockedInError, ConflictError, NoOpenEntryError, NotFoundError
from .model import ClockStatus, TimeEntry
from .repository import TimeEntryRepository


class TimeAttendanceService:
    """Clock in/out with at most one open entry per user.

    The open-entry check is a fast path only; the store's unique key on open
    entries is what actually rejects a concurrent second clock-in.
    """

    def __init__(self, entries: TimeEntryRepository, *, history_months: int = ENTRY_HISTORY_MONTHS):
        self._entries = entries
        self._history_months = int(history_months)

    def clock_in(self, user_id: int, *, now: datetime | None = None, source: str = DEFAULT_ENTRY_SOURCE) -> TimeEntry:
        user_id = require_id(user_id, "userId")
        now = now or now_local()

        if self._entries.find_open_for_user(user_id):
            raise AlreadyClockedInError("Already clocked in")

        try:
            entry_id = self._entries.create_clock_in(user_id=user_id, clock_in=now, source=source)
        except ConflictError:
            raise AlreadyClockedInError("Already clocked in")

        return TimeEntry(entry_id=entry_id, user_id=user_id, clock_in=now, clock_out=None, source=source)

    def clock_out(self, user_id: int, *, now: datetime | None = None) -> TimeEntry:
        user_id = require_id(user_id, "userId")
        now = now or now_local()

        open_entry = self._entries.find_open_for_user(user_id)
        if not open_entry:
            raise NoOpenEntryError("No open clock-in found")

        clock_out = max(now, open_entry.clock_in)
        if not self._entries.close_entry(entry_id=open_entry.entry_id, clock_out=clock_out):
            raise NotFoundError("Open entry disappeared before clock-out")

        closed = self._entries.get_by_id(open_entry.entry_id)
        if not closed:
            raise NotFoundError("Time entry not found")
        return closed

    def get_status(self, user_id: Optional[int]) -> ClockStatus:
        if not user_id:
            return ClockStatus(clocked_in=False)

        open_entry = self._entries.find_open_for_user(int(user_id))
        if not open_entry:
            return ClockStatus(clocked_in=False)
        return ClockStatus(clocked_in=True, active_entry_id=open_entry.entry_id, since=open_entry.clock_in)

    def list_entries(
        self,
        user_id: int,
        since: Union[date, datetime, None] = None,
        *,
        today: date | None = None,
    ) -> list[TimeEntry]:
        user_id = require_id(user_id, "userId")
        if since is None:
            since = subtract_months(today or now_local().date(), self._history_months)
        if not isinstance(since, datetime):
            since = local_midnight(since)
        return list(self._entries.list_since(user_id=user_id, since=since))
