"""Calendar-month helpers for billing attribution"""

import calendar
from datetime import date
from dateutil.relativedelta import relativedelta


def first_of_month(value: date) -> date:
    """Normalize a date to the first day of its month"""
    return value.replace(day=1)


def add_months(month: date, months: int) -> date:
    """
    Add whole calendar months to a billing month.

    The result is pinned to day 1, so month lengths never shift the outcome.
    """
    return first_of_month(month) + relativedelta(months=months)


def month_key(month: date) -> str:
    """YYYY-MM key used to group statements"""
    return f"{month.year:04d}-{month.month:02d}"


def parse_month_key(key: str) -> date:
    """Parse a YYYY-MM key back into a first-of-month date"""
    year, month = key.split("-")
    return date(int(year), int(month), 1)


def month_label(month: date) -> str:
    """Human readable statement label, e.g. 'March 2026'"""
    return f"{calendar.month_name[month.month]} {month.year}"
