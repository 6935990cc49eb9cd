from __future__ import annotations

from collections import OrderedDict
from datetime import date, datetime, timedelta
from typing import Optional, Union

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.day_range import build_day_index
from ..common.validators import require_id, require_non_empty
from ..core import policy
from ..core.constants import DENIED_VISIBILITY_DAYS
from ..core.enums import TimeOffStatus
from ..core.exceptions import AuthenticationError, AuthorizationError, InvalidRangeError, NotFoundError, ValidationError
from ..users.model import Actor
from .model import TimeOffRequest
from .repository import TimeOffRepository

DECIDABLE_STATUSES = (TimeOffStatus.APPROVED, TimeOffStatus.DENIED)

StatusLike = Union[TimeOffStatus, str, None]


def parse_status(value: StatusLike, *, allow_all: bool = True) -> Optional[TimeOffStatus]:
    """Turn "approved"/"PENDING"/... into a TimeOffStatus; "all" or blank means no filter."""
    if value is None or isinstance(value, TimeOffStatus):
        return value
    v = str(value).strip().upper()
    if not v or (allow_all and v == "ALL"):
        return None
    try:
        return TimeOffStatus(v)
    except ValueError:
        raise ValidationError(f"Unknown status: {value}")


class TimeOffService:
    """Time-off request lifecycle and calendar queries.

    Denied requests drop out of listings `denied_visibility_days` after they
    end but stay in storage.
    """

    def __init__(self, requests: TimeOffRepository, *, denied_visibility_days: int = DENIED_VISIBILITY_DAYS):
        self._requests = requests
        self._denied_visibility_days = int(denied_visibility_days)

    def _denied_cutoff(self, today: date) -> date:
        return today - timedelta(days=self._denied_visibility_days)

    def create(self, *, user_id: int, start_date: str, end_date: str, reason: str) -> TimeOffRequest:
        user_id = require_id(user_id, "userId")
        reason = require_non_empty(reason, "reason")
        start = parse_iso_date(start_date, "startDate")
        end = parse_iso_date(end_date, "endDate")
        if end < start:
            raise InvalidRangeError("endDate cannot be before startDate")

        request_id = self._requests.create(user_id=user_id, start_date=start, end_date=end, reason=reason)
        created = self._requests.get_by_id(request_id)
        if not created:
            raise NotFoundError("Time-off request not found after create")
        return created

    def list_by_range(
        self,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        *,
        status: StatusLike = None,
        today: Optional[date] = None,
    ) -> list[TimeOffRequest]:
        today = today or now_local().date()
        range_from = date_from or today
        if date_to is not None and date_to < range_from:
            raise InvalidRangeError("'to' cannot be before 'from'")

        return list(
            self._requests.list_overlapping(
                range_from=range_from,
                range_to=date_to,
                denied_cutoff=self._denied_cutoff(today),
                status=parse_status(status),
                order_by="start_date",
            )
        )

    def list_for_day(
        self,
        day: date,
        *,
        status: StatusLike = None,
        today: Optional[date] = None,
    ) -> list[TimeOffRequest]:
        today = today or now_local().date()
        return list(
            self._requests.list_overlapping(
                range_from=day,
                range_to=day,
                denied_cutoff=self._denied_cutoff(today),
                status=parse_status(status),
                order_by="created_at",
            )
        )

    def calendar(
        self,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        *,
        status: StatusLike = None,
        today: Optional[date] = None,
    ) -> "OrderedDict[str, list[TimeOffRequest]]":
        """Day key -> requests covering that day, for calendar indicators."""
        today = today or now_local().date()
        items = self.list_by_range(date_from, date_to, status=status, today=today)
        return build_day_index(items, clip_from=date_from or today, clip_to=date_to)

    def set_status(
        self,
        *,
        request_id: int,
        new_status: StatusLike,
        actor: Optional[Actor],
        now: Optional[datetime] = None,
    ) -> TimeOffRequest:
        if actor is None:
            raise AuthenticationError("Sign in to continue")
        if not policy.can_approve_or_deny(actor.role):
            raise AuthorizationError("Only managers and admins can approve or deny time off")

        status = parse_status(new_status, allow_all=False)
        if status not in DECIDABLE_STATUSES:
            raise ValidationError("status must be APPROVED or DENIED")

        request_id = require_id(request_id, "request id")
        if not self._requests.get_by_id(request_id):
            raise NotFoundError("Time-off request not found")

        self._requests.update_status(
            request_id=request_id,
            status=status,
            decided_by=int(actor.user_id),
            decided_at=now or now_local(),
        )
        updated = self._requests.get_by_id(request_id)
        if not updated:
            raise NotFoundError("Time-off request not found")
        return updated

    def delete(self, *, request_id: int, actor: Optional[Actor]) -> None:
        if actor is None:
            raise AuthenticationError("Sign in to continue")

        request_id = require_id(request_id, "request id")
        target = self._requests.get_by_id(request_id)
        if not target:
            raise NotFoundError("Time-off request not found")

        if not policy.can_delete_time_off(actor.user_id, actor.role, target.user_id):
            raise AuthorizationError("You can only cancel your own time-off requests")

        if not self._requests.delete(request_id):
            raise NotFoundError("Time-off request not found")
