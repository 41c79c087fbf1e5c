"""Date utilities for famfin.

Pure calendar arithmetic for month offsets and period labels.

Month indexes are 0-based (January = 0) throughout the ledger, matching the
period keys. When a day-of-month does not exist in the target month the date
is clamped to the last day of that month (31 Jan + 1 month = 28/29 Feb).
"""

import calendar
from datetime import date

MONTH_ABBREVIATIONS = ["jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"]


def days_in_month(year: int, month_index: int) -> int:
    """Number of days in a month.

    Args:
        year: Calendar year.
        month_index: Month index, 0-11.

    Returns:
        Day count (28-31).

    Raises:
        ValueError: If month_index is outside 0-11.
    """
    if not 0 <= month_index <= 11:
        raise ValueError(f"Month index must be 0-11, got {month_index}")
    return calendar.monthrange(year, month_index + 1)[1]


def shift_month(year: int, month_index: int, month_offset: int) -> tuple[int, int]:
    """Move a (year, month_index) pair by a number of months.

    Args:
        year: Calendar year.
        month_index: Month index, 0-11.
        month_offset: Months to move (may be zero or negative).

    Returns:
        Tuple of (target_year, target_month_index).
    """
    absolute = year * 12 + month_index + month_offset
    return absolute // 12, absolute % 12


def resolve(start_date: date, start_day: int, month_offset: int) -> tuple[int, int, date]:
    """Resolve the date that falls month_offset months after start_date.

    The target month is computed from start_date's month; the day is
    start_day, clamped to the last day of the target month.

    Args:
        start_date: Date the offset is counted from.
        start_day: Day of month to place the result on (1-31).
        month_offset: Number of months after start_date's month.

    Returns:
        Tuple of (target_year, target_month_index, target_date).

    Raises:
        ValueError: If start_day is outside 1-31.
    """
    if not 1 <= start_day <= 31:
        raise ValueError(f"Day of month must be 1-31, got {start_day}")

    target_year, target_month_index = shift_month(start_date.year, start_date.month - 1, month_offset)
    day = min(start_day, days_in_month(target_year, target_month_index))
    return target_year, target_month_index, date(target_year, target_month_index + 1, day)


def format_period_id(year: int, month_index: int) -> str:
    """Format the cosmetic period id (e.g. "nov-2025")."""
    return f"{MONTH_ABBREVIATIONS[month_index]}-{year}"


def format_period_label(year: int, month_index: int) -> str:
    """Format a human-readable period label (e.g. "November 2025")."""
    return date(year, month_index + 1, 1).strftime("%B %Y")


def parse_period(value: str) -> tuple[int, int]:
    """Parse a YYYY-MM string into (year, month_index).

    Args:
        value: Month in YYYY-MM format.

    Returns:
        Tuple of (year, month_index).

    Raises:
        ValueError: If the value is not a valid YYYY-MM month.
    """
    parts = value.strip().split("-")
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        raise ValueError(f"Invalid month '{value}', expected YYYY-MM")
    year, month = int(parts[0]), int(parts[1])
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month '{value}', month must be 01-12")
    return year, month - 1


def month_range(year: int, month_index: int) -> tuple[str, str]:
    """Calculate first and last day of a month.

    Args:
        year: Calendar year.
        month_index: Month index, 0-11.

    Returns:
        Tuple of (first_day, last_day) in YYYY-MM-DD format.
    """
    first = date(year, month_index + 1, 1)
    last = date(year, month_index + 1, days_in_month(year, month_index))
    return first.isoformat(), last.isoformat()
