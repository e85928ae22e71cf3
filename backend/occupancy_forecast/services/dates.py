"""
Calendar and interval helpers shared by the forecast services.
Month windows, inclusive day overlaps, date parsing and rule lookup.
"""
import math
from datetime import datetime, date
from calendar import monthrange
from typing import Callable, Iterable, List, Optional, TypeVar

T = TypeVar("T")


def month_start(d: date) -> date:
    """First calendar day of the month containing d."""
    return date(d.year, d.month, 1)


def days_in_month(d: date) -> int:
    """Number of days in the month containing d (leap-year aware)."""
    _, last_day = monthrange(d.year, d.month)
    return last_day


def month_end(d: date) -> date:
    """Last calendar day of the month containing d."""
    return date(d.year, d.month, days_in_month(d))


def add_months(d: date, months: int) -> date:
    """First day of the month `months` away from the month containing d."""
    index = d.year * 12 + (d.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def trailing_months(as_of: date, months_back: int) -> List[date]:
    """
    First days of the trailing calendar months, oldest to newest.

    The last entry is the month containing `as_of`.
    """
    return [add_months(as_of, -i) for i in range(months_back - 1, -1, -1)]


def same_month(d1: date, d2: date) -> bool:
    """Check if two dates fall in the same calendar month of the same year."""
    return d1.year == d2.year and d1.month == d2.month


def month_index(d: date) -> int:
    """Calendar-month index, 0 = January ... 11 = December."""
    return d.month - 1


def month_label(d: date) -> str:
    """Short chart label, e.g. 'Jan 24'."""
    return d.strftime("%b %y")


def overlap_days(start: date, end: date, window_start: date, window_end: date) -> int:
    """
    Days of [start, end] falling inside [window_start, window_end].

    Both ends are inclusive; disjoint intervals give 0.
    """
    overlap_start = max(start, window_start)
    overlap_end = min(end, window_end)
    return max(0, (overlap_end - overlap_start).days + 1)


def stay_days(check_in: date, check_out: date) -> int:
    """Inclusive length of a stay in days."""
    return max(0, (check_out - check_in).days + 1)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def parse_date(value) -> Optional[date]:
    """
    Parse a stored date into a date object.

    Accepts date/datetime objects, ISO dates and timestamps, and M/D/YYYY.
    Returns None when the value cannot be parsed.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    try:
        return datetime.strptime(text, "%m/%d/%Y").date()
    except ValueError:
        return None


def parse_datetime(value) -> Optional[datetime]:
    """Parse a stored timestamp; date-only values map to midnight."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        d = parse_date(text)
        return datetime(d.year, d.month, d.day) if d else None


def first_match(rules: Iterable[T], predicate: Callable[[T], bool]) -> Optional[T]:
    """
    Return the first rule satisfying predicate, or None.

    Rules are expected to be pre-sorted so that the first hit wins
    (threshold tiers highest first, month buckets oldest first).
    """
    for rule in rules:
        if predicate(rule):
            return rule
    return None
