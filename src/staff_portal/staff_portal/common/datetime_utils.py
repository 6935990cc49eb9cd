from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from ..core.constants import DATE_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: Optional[str], field_name: str = "date") -> date:
    """Parse a local YYYY-MM-DD string into a date.

    Raises ValidationError for missing or malformed input.
    """
    if value is None:
        raise ValidationError(f"{field_name} is required")
    if not isinstance(value, str):
        raise ValidationError(f"Invalid {field_name}; expected yyyy-mm-dd")
    v = value.strip()
    if not v:
        raise ValidationError(f"{field_name} is required")
    try:
        return datetime.strptime(v, DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"Invalid {field_name}; expected yyyy-mm-dd")


def parse_optional_date(value: Optional[str], field_name: str = "date") -> Optional[date]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_iso_date(value, field_name)


def local_midnight(d: date) -> datetime:
    return datetime.combine(d, time.min)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def subtract_months(d: date, months: int) -> date:
    """Same day-of-month `months` earlier, clamped to the target month's length."""
    month_index = d.year * 12 + (d.month - 1) - int(months)
    year, month = divmod(month_index, 12)
    month += 1
    for day in range(d.day, 0, -1):
        try:
            return date(year, month, day)
        except ValueError:
            continue
    raise ValueError(f"Cannot subtract {months} months from {d}")
