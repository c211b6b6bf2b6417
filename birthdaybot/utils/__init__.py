"""BirthdayBot - Utils Package."""

from birthdaybot.utils.dates import (
    InvalidBirthdayError,
    format_birthday,
    from_epoch,
    matching_days,
    ordinal,
    parse_birthday,
    to_epoch,
)
from birthdaybot.utils.responses import safe_send

__all__ = [
    "InvalidBirthdayError",
    "format_birthday",
    "from_epoch",
    "matching_days",
    "ordinal",
    "parse_birthday",
    "to_epoch",
    "safe_send",
]
