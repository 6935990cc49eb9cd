from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class TimeEntry:
    """Domain entity: one work session, open until clock_out is set."""

    entry_id: int
    user_id: int
    clock_in: datetime
    clock_out: Optional[datetime]
    source: str = "web"

    @property
    def is_open(self) -> bool:
        return self.clock_out is None


@dataclass(frozen=True)
class ClockStatus:
    clocked_in: bool
    active_entry_id: Optional[int] = None
    since: Optional[datetime] = None
