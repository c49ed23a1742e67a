"""Date manipulation utilities"""

import math
from datetime import date
from typing import Iterator
from dateutil.relativedelta import relativedelta

# Mid-month anchor keeps whole-month arithmetic away from month-end clamping
ANCHOR_DAY = 15

AVERAGE_DAYS_PER_MONTH = 30.44


def month_anchor(day: date) -> date:
    """Return the 15th of the month containing `day`"""
    return day.replace(day=ANCHOR_DAY)


def add_months(from_date: date, months: int) -> date:
    """Calendar-aware month addition (not a fixed 30-day step)"""
    return from_date + relativedelta(months=months)


class MonthRange:
    """
    Month anchors from start through end (inclusive), one calendar month apart.

    Lazy and restartable: every iteration starts again from `start`.
    """

    def __init__(self, start: date, end: date):
        self.start = month_anchor(start)
        self.end = month_anchor(end)

    def __iter__(self) -> Iterator[date]:
        offset = 0
        current = self.start
        while current <= self.end:
            yield current
            offset += 1
            current = add_months(self.start, offset)

    def __len__(self) -> int:
        if self.end < self.start:
            return 0
        return (self.end.year - self.start.year) * 12 + self.end.month - self.start.month + 1


def same_month(a: date, b: date) -> bool:
    return a.year == b.year and a.month == b.month


def months_spanned(start: date, end: date) -> int:
    """Approximate whole months between two dates, rounded up, never below 1"""
    days = (end - start).days
    return max(1, math.ceil(days / AVERAGE_DAYS_PER_MONTH))
