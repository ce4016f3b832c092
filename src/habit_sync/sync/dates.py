from __future__ import annotations

import datetime as dt

from dateutil.relativedelta import relativedelta

from habit_sync.errors import InvalidInterval, UnknownFrequency
from habit_sync.sync.constants import DEFAULT_INTERVAL


def format_date(d: dt.date) -> str:
    """Render the sheet's date literal, e.g. '3 January 2025'.

    Dates are compared as strings everywhere, so this is the only place
    that decides how a date looks.
    """

    return f"{d.day} {d.strftime('%B')} {d.year}"


def period_key(frequency: str, today: dt.date) -> str:
    """Label of the period `today` falls in for a frequency tab.

    Week labels pair the ISO week with the ISO week-year, so 30 December
    2024 is "1 2025". Week tabs filled by older versions of the tracker
    paired the ISO week with the calendar year ("1 2024" for that day);
    around New Year those rows will not match and a new row is appended.
    """

    if frequency == "day":
        return format_date(today)
    if frequency == "week":
        iso_year, iso_week, _ = today.isocalendar()
        return f"{iso_week} {iso_year}"
    if frequency == "month":
        return f"{today.strftime('%B')} {today.year}"
    if frequency == "year":
        return str(today.year)
    raise UnknownFrequency(frequency)


def parse_interval(raw: str, habit: str = "") -> int:
    value = (raw or "").strip()
    if not value:
        return DEFAULT_INTERVAL
    try:
        interval = int(value)
    except ValueError:
        raise InvalidInterval(habit, raw) from None
    if interval < 1:
        raise InvalidInterval(habit, raw)
    return interval


def advance(anchor: dt.date, frequency: str, interval: int, habit: str = "") -> dt.date:
    if frequency == "day":
        return anchor + dt.timedelta(days=interval)
    if frequency == "week":
        return anchor + dt.timedelta(days=7 * interval)
    # relativedelta clamps to month end: 31 January + 1 month = 28 February
    if frequency == "month":
        return anchor + relativedelta(months=interval)
    if frequency == "year":
        return anchor + relativedelta(years=interval)
    raise UnknownFrequency(frequency, habit)
