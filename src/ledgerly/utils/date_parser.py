"""Date parsing utilities."""

import re
from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

PERIODS = (
    "this-month",
    "this-year",
    "this-week",
    "last-month",
    "last-year",
    "last-week",
)


def parse_iso_date(date_str: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` calendar date.

    Stored records only accept this form. Unlike :func:`parse_date` nothing is
    guessed: "2024-2-1", "01/02/2024" or "2024-02-30" are all rejected.

    Raises:
        ValueError: If the string is not a valid ``YYYY-MM-DD`` date
    """
    value = date_str.strip() if isinstance(date_str, str) else date_str
    if not isinstance(value, str) or not ISO_DATE_PATTERN.match(value):
        raise ValueError(f"Invalid date '{date_str}': expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValueError(f"Invalid date '{date_str}': {e}")


def parse_iso_date_or_none(date_str: Optional[str]) -> Optional[date]:
    """Parse a strict ``YYYY-MM-DD`` date, returning None when absent or malformed."""
    if not date_str:
        return None
    try:
        return parse_iso_date(date_str)
    except ValueError:
        return None


def parse_date(date_str: str) -> date:
    """Parse a user-supplied date for CLI filters.

    Supports:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative days: "today", "yesterday", "tomorrow"
    - Period starts: "this month", "last month", "this year", "last year",
      "this week", "last week" (weeks start on Monday)

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_days = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_days:
        return relative_days[date_str]

    if date_str.startswith(("this ", "last ")):
        period = date_str.replace(" ", "-")
        if period in PERIODS:
            return get_date_range(period)[0]

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Current periods end today; previous periods cover the full span.

    Args:
        period: One of this-month, this-year, this-week, last-month,
            last-year, last-week

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()
    month_start = today.replace(day=1)
    year_start = today.replace(month=1, day=1)
    week_start = today - timedelta(days=today.weekday())

    if period == "this-month":
        return (month_start, today)
    if period == "this-year":
        return (year_start, today)
    if period == "this-week":
        return (week_start, today)
    if period == "last-month":
        return (month_start - relativedelta(months=1), month_start - timedelta(days=1))
    if period == "last-year":
        return (year_start - relativedelta(years=1), year_start - timedelta(days=1))
    if period == "last-week":
        start = week_start - timedelta(days=7)
        return (start, start + timedelta(days=6))

    raise ValueError(
        f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}"
    )
