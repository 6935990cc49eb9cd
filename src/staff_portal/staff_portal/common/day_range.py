"""Inclusive calendar-day ranges.

Dates here are naive local calendar dates, so stepping by one day never
drifts across a timezone boundary.
"""

from __future__ import annotations

from collections import OrderedDict
from datetime import date, timedelta
from typing import Iterable, Iterator, Optional, Protocol, TypeVar

from ..core.constants import DATE_FORMAT

ONE_DAY = timedelta(days=1)


class DateRanged(Protocol):
    start_date: date
    end_date: date
    status: object


T = TypeVar("T", bound=DateRanged)


def day_key(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def days_covered(start: date, end: date) -> Iterator[date]:
    """Yield every day from start to end, both included.

    Yields nothing when end is before start.
    """
    cur = start
    while cur <= end:
        yield cur
        cur += ONE_DAY


def covers(start: date, end: date, day: date) -> bool:
    return start <= day <= end


def overlaps(start: date, end: date, range_from: Optional[date], range_to: Optional[date]) -> bool:
    """True when [start, end] shares at least one day with [range_from, range_to].

    A missing bound is open-ended.
    """
    if range_to is not None and start > range_to:
        return False
    if range_from is not None and end < range_from:
        return False
    return True


def build_day_index(
    items: Iterable[T],
    *,
    clip_from: Optional[date] = None,
    clip_to: Optional[date] = None,
    status: object = None,
) -> "OrderedDict[str, list[T]]":
    """Map each covered day (yyyy-mm-dd) to the items spanning it.

    Keys come out in calendar order; items keep their input order per day.
    """
    index: dict[date, list[T]] = {}
    for item in items:
        if status is not None and item.status != status:
            continue
        start = item.start_date if clip_from is None else max(item.start_date, clip_from)
        end = item.end_date if clip_to is None else min(item.end_date, clip_to)
        for d in days_covered(start, end):
            index.setdefault(d, []).append(item)
    return OrderedDict((day_key(d), index[d]) for d in sorted(index))
