"""Date parsing utilities."""

import re
from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_OFFSET_PATTERN = re.compile(r"^([+-])\s*(\d+)\s*([dwmy])$")


def parse_date(date_str: str, today: date | None = None) -> date:
    """Parse a date string into a date object.

    Supports:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative words: "today", "yesterday", "tomorrow"
    - Offsets from today, handy for projection horizons: "+30d", "+6w",
      "+3m", "+1y", "-2m"
    - Period ends: "end of month", "end of year"

    Args:
        date_str: Date string in various formats
        today: Reference date for relative forms (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    if today is None:
        today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        "end of month": today + relativedelta(day=31),
        "end of year": today.replace(month=12, day=31),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    match = _OFFSET_PATTERN.match(date_str)
    if match:
        sign, count, unit = match.groups()
        count = int(count) if sign == "+" else -int(count)
        offsets = {
            "d": relativedelta(days=count),
            "w": relativedelta(weeks=count),
            "m": relativedelta(months=count),
            "y": relativedelta(years=count),
        }
        return today + offsets[unit]

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
