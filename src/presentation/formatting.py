"""
Date display and input helpers for the booking screens.
"""

from datetime import date, datetime, timedelta
from typing import Optional

DISPLAY_DATE_FORMAT = "%d.%m.%Y"

MILLIS_PER_DAY = 24 * 60 * 60 * 1000
_EPOCH = date(1970, 1, 1)


def format_date(value: date, fmt: str = DISPLAY_DATE_FORMAT) -> str:
    """Format a date for display, e.g. 05.03.2025."""
    return value.strftime(fmt)


def format_date_range(
    arrival_date: Optional[date],
    departure_date: Optional[date],
    fmt: str = DISPLAY_DATE_FORMAT,
) -> str:
    """
    Format an arrival/departure pair as "05.03.2025 - 07.03.2025".

    Returns an empty string until both dates are selected.
    """
    if arrival_date is None or departure_date is None:
        return ""
    return f"{format_date(arrival_date, fmt)} - {format_date(departure_date, fmt)}"


def parse_date(text: str, fmt: str = DISPLAY_DATE_FORMAT) -> date:
    """
    Parse a date typed by the user.

    Accepts the display format (05.03.2025 by default) or ISO (2025-03-05).

    Raises:
        ValueError: If the text matches neither format
    """
    text = text.strip()
    try:
        return datetime.strptime(text, fmt).date()
    except ValueError:
        pass

    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValueError(
            f"Invalid date '{text}'. Expected {date(2025, 3, 5).strftime(fmt)} or 2025-03-05"
        ) from None


def date_from_epoch_millis(millis: int) -> date:
    """
    Convert a date picker selection (UTC epoch milliseconds) to a date.

    Whole days are counted toward zero, so any instant within one day
    before the epoch still maps to 1970-01-01.
    """
    days = abs(millis) // MILLIS_PER_DAY
    if millis < 0:
        days = -days
    return _EPOCH + timedelta(days=days)
