"""
BirthdayBot - Shared Constants
==============================

Centralized constants for the entire codebase.
Import from here instead of defining locally.
"""


# =============================================================================
# Birthdays
# =============================================================================

# Year every stored birthday is pinned to. Must be a leap year so Feb 29 exists.
SENTINEL_YEAR = 2000

# Input for /set-birthday: English short month name and day, e.g. "Jun 06"
BIRTHDAY_INPUT_EXAMPLE = "Jun 06"
BIRTHDAY_INPUT_MAX_LENGTH = 32

MONTH_NAMES = [
    "", "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December"
]

# {0} is replaced with the member mention
BIRTHDAY_MESSAGES = [
    "Wow look, it's {0}'s birthday today! Happy birthday, hope you have a good one!",
    "Hey everyone! It's {0}'s birthday, come and wish them a happy birthday!",
    "Happy birthday, {0}! Have an amazing day!",
    "Would you look at that, it's {0}'s birthday. Time to wish them a happy birthday!",
]
BOT_BIRTHDAY_MESSAGE = "Wow! It's my own birthday! Happy birthday to myself!"


# =============================================================================
# Database
# =============================================================================

DB_TIMEOUT = 10.0  # Seconds to wait on a locked database
