"""Hours calendar: worked time grouped per day and per week.

Display aid only; open entries count as zero hours.
"""

from __future__ import annotations

from collections import OrderedDict
from datetime import timedelta
from typing import Iterable

from ..common.day_range import day_key
from .model import TimeEntry

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def worked_minutes(entry: TimeEntry) -> int:
    if not entry.clock_out:
        return 0
    minutes = int((entry.clock_out - entry.clock_in).total_seconds() // 60)
    return max(minutes, 0)


def _hours(minutes: int) -> float:
    return round(minutes / 60, 2)


def _row(entry: TimeEntry) -> dict:
    return {
        "id": entry.entry_id,
        "clock_in": entry.clock_in,
        "clock_out": entry.clock_out,
        "hours": _hours(worked_minutes(entry)),
    }


def summarize_by_day(entries: Iterable[TimeEntry]) -> "OrderedDict[str, list[dict]]":
    days: dict[str, list[dict]] = {}
    for e in entries:
        days.setdefault(day_key(e.clock_in.date()), []).append(_row(e))
    return OrderedDict((k, days[k]) for k in sorted(days))


def summarize_by_week(entries: Iterable[TimeEntry]) -> "OrderedDict[str, dict]":
    """Group by the Monday that starts each entry's week."""
    weeks: dict[str, dict] = {}
    minutes_by_week: dict[str, int] = {}

    for e in entries:
        d = e.clock_in.date()
        week_start = d - timedelta(days=d.weekday())
        key = day_key(week_start)

        week = weeks.get(key)
        if week is None:
            week = {"week_start": key, **{name: [] for name in WEEKDAYS}, "total_hours": 0.0}
            weeks[key] = week
            minutes_by_week[key] = 0

        week[WEEKDAYS[d.weekday()]].append(_row(e))
        minutes_by_week[key] += worked_minutes(e)
        week["total_hours"] = _hours(minutes_by_week[key])

    return OrderedDict((k, weeks[k]) for k in sorted(weeks))
