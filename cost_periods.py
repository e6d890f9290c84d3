#!/usr/bin/env python3
"""
Period resolution for cost comparisons.

The first period always runs to the first day of the following month. The
second period does too, unless it starts in the current month: then it stops
at yesterday and its costs are projected to the full month.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal

from cost_errors import InvalidDateError

DATE_FORMAT = "%Y-%m-%d"
PROJECTION_SUFFIX = " (projection)"


@dataclass(frozen=True)
class Period:
    start: date
    end: date  # exclusive
    is_projection: bool = False
    projection_multiplier: Decimal = Decimal(1)

    @property
    def label(self):
        label = self.start.strftime(DATE_FORMAT)
        if self.is_projection:
            label += PROJECTION_SUFFIX
        return label


def parse_date(text):
    """Parse a YYYY-MM-DD string into a date."""
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except (TypeError, ValueError) as e:
        raise InvalidDateError(f"Invalid date '{text}', expected YYYY-MM-DD: {e}") from e


def first_of_next_month(day):
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def days_in_month(day):
    return calendar.monthrange(day.year, day.month)[1]


def default_starts(today):
    """Return (first day of previous month, first day of current month)."""
    this_month_first = today.replace(day=1)
    previous_month_first = (this_month_first - timedelta(days=1)).replace(day=1)
    return previous_month_first, this_month_first


def resolve_periods(first_start, second_start, today):
    """
    Build the two comparison periods.

    Args:
        first_start (date): start of the first period, inclusive.
        second_start (date): start of the second period, inclusive.
        today (date): current wall-clock date.

    Returns:
        tuple[Period, Period]: first and second period.
    """
    first = Period(first_start, first_of_next_month(first_start))

    if (second_start.year, second_start.month) != (today.year, today.month):
        return first, Period(second_start, first_of_next_month(second_start))

    # Stop one day short of today, today's costs are still incomplete
    second_end = today - timedelta(days=1)
    if second_end <= second_start:
        raise InvalidDateError(
            f"Cannot project {second_start.strftime(DATE_FORMAT)}: "
            f"no complete day of cost data before {today.strftime(DATE_FORMAT)}"
        )

    multiplier = Decimal(days_in_month(today)) / Decimal(second_end.day)
    return first, Period(second_start, second_end, True, multiplier)
