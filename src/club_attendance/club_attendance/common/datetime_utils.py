from __future__ import annotations

import calendar
from datetime import date, datetime, tzinfo

from ..core.constants import DATE_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def now_in(tz: tzinfo) -> datetime:
    """Current instant expressed in ``tz``.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(tz)


def months_before(day: date, months: int) -> date:
    """Same calendar day ``months`` earlier, clamped to the end of short months."""
    total = day.year * 12 + (day.month - 1) - months
    year, month = divmod(total, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))
