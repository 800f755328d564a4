"""Calendar recurrence arithmetic."""

import logging
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from ledgerbooks.domain.entities import Period

logger = logging.getLogger(__name__)


def calculate_next_date(prev_date: date, period: Period, frequency: int, start_date: date) -> date:
    """Calculate the occurrence following ``prev_date``.

    Month and year steps keep the day of month of ``prev_date`` and clamp to
    the end of short months. When clamping has pulled the day below the
    anchor day of ``start_date``, the result moves to the last day of its
    month, so a schedule anchored on the 31st runs Jan 31, Feb 28, Mar 31,
    Apr 30 instead of drifting to the 28th.

    Args:
        prev_date: Previous occurrence
        period: Recurrence unit
        frequency: Number of units per step
        start_date: Anchor date of the recurrence

    Returns:
        Next occurrence date
    """
    if period is Period.DAYS:
        new_date = prev_date + timedelta(days=frequency)
    elif period is Period.WEEKS:
        new_date = prev_date + timedelta(weeks=frequency)
    elif period is Period.MONTHS:
        new_date = prev_date + relativedelta(months=frequency)
    elif period is Period.YEARS:
        new_date = prev_date + relativedelta(years=frequency)
    else:
        raise ValueError(f"Unknown period: {period!r}")

    if period in (Period.MONTHS, Period.YEARS) and new_date.day < start_date.day:
        # day=31 is clamped by relativedelta to the month's last day
        new_date = new_date + relativedelta(day=31)

    logger.debug(
        "next date: prev=%s new=%s start=%s period=%s frequency=%d",
        prev_date,
        new_date,
        start_date,
        period.value,
        frequency,
    )
    return new_date
