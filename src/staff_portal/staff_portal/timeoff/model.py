from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import TimeOffStatus


@dataclass(frozen=True)
class TimeOffRequest:
    """Domain entity: an inclusive [start_date, end_date] absence request.

    `user_name` is the owner's display name joined in by the repository.
    """

    request_id: int
    user_id: int
    reason: str
    status: TimeOffStatus
    start_date: date
    end_date: date
    created_at: datetime
    user_name: Optional[str] = None
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None
