from __future__ import annotations

import calendar
import re
from datetime import date, datetime, time
from typing import Optional

_HHMM = re.compile(r"^([01][0-9]|2[0-3]):[0-5][0-9]$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value) -> Optional[time]:
    """Parse a 24h HH:MM string; None when empty or malformed."""
    if isinstance(value, time):
        return value
    v = (value or "").strip() if isinstance(value, str) else ""
    # Accept HH:MM:SS as stored by some clients, compare on HH:MM only.
    if len(v) == 8 and v.count(":") == 2:
        v = v[:5]
    if not _HHMM.match(v):
        return None
    hours, minutes = v.split(":")
    return time(hour=int(hours), minute=int(minutes))


def minutes_between(start, end) -> Optional[int]:
    """Minutes from start to end, or None unless both parse and end > start."""
    start_t = parse_hhmm(start)
    end_t = parse_hhmm(end)
    if start_t is None or end_t is None:
        return None
    minutes = (end_t.hour * 60 + end_t.minute) - (start_t.hour * 60 + start_t.minute)
    if minutes <= 0:
        return None
    return minutes


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch it easily.
    """
    return datetime.now()
