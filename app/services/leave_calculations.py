"""
Calendar arithmetic shared by the balance, coverage and validation services.

All ranges are inclusive on both ends and compared as calendar dates.
"""
from datetime import date, datetime, timedelta
from typing import Iterator, Union

from app.core.exceptions import InvalidDateRangeError

DateLike = Union[date, datetime]


def as_date(value: DateLike) -> date:
    """Drop the time component of a datetime; dates pass through unchanged."""
    if isinstance(value, datetime):
        return value.date()
    return value


def ranges_overlap(a_start: DateLike, a_end: DateLike, b_start: DateLike, b_end: DateLike) -> bool:
    """True if [a_start, a_end] and [b_start, b_end] share at least one day."""
    return as_date(a_start) <= as_date(b_end) and as_date(a_end) >= as_date(b_start)


def covers_day(start: DateLike, end: DateLike, day: DateLike) -> bool:
    return ranges_overlap(start, end, day, day)


def count_leave_days(start: DateLike, end: DateLike) -> int:
    """
    Inclusive number of calendar days between start and end.

    Raises:
        InvalidDateRangeError: if end is before start.
    """
    start, end = as_date(start), as_date(end)
    if end < start:
        raise InvalidDateRangeError(start, end)
    return (end - start).days + 1


def iter_days(start: DateLike, end: DateLike) -> Iterator[date]:
    """Yield every calendar day in [start, end] in chronological order."""
    start, end = as_date(start), as_date(end)
    if end < start:
        raise InvalidDateRangeError(start, end)
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def round_half_up(value: float) -> int:
    # round() uses banker's rounding; percentages are displayed half-up
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)
