"""
BirthdayBot - Date Utilities
============================

Normalizes free-text birthdays into calendar days pinned to SENTINEL_YEAR,
and converts them to and from the UTC epoch seconds kept in the database.

Leap days:
    SENTINEL_YEAR is a leap year, so "Feb 29" is a valid birthday. In years
    without a Feb 29 those birthdays are celebrated on Feb 28.
"""

import calendar
import re
from datetime import date, datetime, timezone
from typing import List, Tuple

from birthdaybot.core.constants import (
    BIRTHDAY_INPUT_EXAMPLE,
    BIRTHDAY_INPUT_MAX_LENGTH,
    MONTH_NAMES,
    SENTINEL_YEAR,
)


MonthDay = Tuple[int, int]

# "jan" -> 1 ... "dec" -> 12, independent of the process locale
MONTH_ABBREVIATIONS = {
    name[:3].lower(): month for month, name in enumerate(MONTH_NAMES) if name
}

DAY_PATTERN = re.compile(r"[0-9]{1,2}")


class InvalidBirthdayError(ValueError):
    """Raised when a birthday string cannot be parsed."""

    def __init__(self, text: str) -> None:
        self.text = text
        shown = text
        if len(shown) > BIRTHDAY_INPUT_MAX_LENGTH:
            shown = shown[:BIRTHDAY_INPUT_MAX_LENGTH] + "..."
        super().__init__(
            f"`{shown}` is not a valid birthday. "
            f"Use a short month name and a day, e.g. `{BIRTHDAY_INPUT_EXAMPLE}`."
        )


def parse_birthday(text: str) -> date:
    """
    Parse a "<Mon> <DD>" string into a date in SENTINEL_YEAR.

    Args:
        text: User input, e.g. "Jun 06". Month is case-insensitive.

    Returns:
        The birthday as a date with year SENTINEL_YEAR.

    Raises:
        InvalidBirthdayError: If the text does not match the format or names
            a day that does not exist.
    """
    parts = text.split()
    if len(parts) != 2:
        raise InvalidBirthdayError(text)

    month_text, day_text = parts
    month = MONTH_ABBREVIATIONS.get(month_text.lower())
    if month is None or not DAY_PATTERN.fullmatch(day_text):
        raise InvalidBirthdayError(text)

    try:
        # SENTINEL_YEAR is a leap year, so Feb 29 passes and Feb 30 does not
        return date(SENTINEL_YEAR, month, int(day_text))
    except ValueError:
        raise InvalidBirthdayError(text) from None


def to_epoch(birthday: date) -> int:
    """Seconds since the epoch for midnight UTC of the birthday in SENTINEL_YEAR."""
    pinned = datetime(SENTINEL_YEAR, birthday.month, birthday.day, tzinfo=timezone.utc)
    return int(pinned.timestamp())


def from_epoch(seconds: int) -> date:
    """Inverse of to_epoch: the UTC calendar day of a stored birthdate."""
    return datetime.fromtimestamp(seconds, tz=timezone.utc).date()


def matching_days(today: date) -> List[MonthDay]:
    """
    Month/day keys whose birthdays are celebrated on `today`.

    Feb 29 birthdays are included on Feb 28 of non-leap years.
    """
    days = [(today.month, today.day)]
    if (today.month, today.day) == (2, 28) and not calendar.isleap(today.year):
        days.append((2, 29))
    return days


def ordinal(n: int) -> str:
    """Ordinal suffix for a day number: 1 -> "st", 12 -> "th", 23 -> "rd"."""
    if 10 <= n % 100 <= 20:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")


def format_birthday(birthday: date) -> str:
    """Display form of a birthday, e.g. "June 6th"."""
    return f"{MONTH_NAMES[birthday.month]} {birthday.day}{ordinal(birthday.day)}"
