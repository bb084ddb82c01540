import math
from datetime import date, timedelta

from loadplan.config import WEEKEND_DAYS
from loadplan.domain.errors import DateOverflowError


def is_work_day(day):
    """Return True if effort accrues on the given day."""
    return day.weekday() not in WEEKEND_DAYS


def _next_day(day):
    try:
        return day + timedelta(days=1)
    except OverflowError:
        raise DateOverflowError(f"Cannot advance past {day.isoformat()}")


def add_work_days(start: date, work_days: float) -> date:
    """
    Find the date on which the given amount of work days has elapsed.

    Counting starts on the day after ``start``; weekend days are skipped.
    A fractional remainder still occupies a whole work day.

    Args:
        start: Date the work is anchored at (never counted itself)
        work_days: Number of work days required

    Returns:
        date: The day the last work day falls on

    Raises:
        DateOverflowError: If the result is outside the supported date range
    """
    remaining = work_days
    current = start
    while remaining > 0:
        current = _next_day(current)
        if is_work_day(current):
            remaining -= 1
    return current


def work_days_remaining_at(start: date, work_days: float, reference_date: date) -> int:
    """
    Count the work days still outstanding after ``reference_date``.

    Work days in the range (start, reference_date] are considered done.
    Fractional remainders round up, matching day-granular scheduling.

    Args:
        start: Date the work is anchored at
        work_days: Total work days of the task
        reference_date: Status date

    Returns:
        int: Outstanding work days, never negative
    """
    remaining = work_days
    current = start
    while remaining > 0 and current < reference_date:
        current = _next_day(current)
        if is_work_day(current):
            remaining -= 1
    return max(0, math.ceil(remaining))


def start_of_quarter(day: date) -> date:
    """Return the first day of the quarter containing ``day``."""
    first_month = day.month - (day.month - 1) % 3
    return date(day.year, first_month, 1)


def next_quarter(day: date) -> date:
    """Return the first day of the quarter following the one containing ``day``."""
    quarter_start = start_of_quarter(day)
    if quarter_start.month == 10:
        return date(quarter_start.year + 1, 1, 1)
    return date(quarter_start.year, quarter_start.month + 3, 1)
