"""
BirthdayBot - Database Module
=============================

SQLite storage for the bot.

Structure:
    - core.py: Base class with connection management and table init
    - birthdays.py: Birthday tracking
"""

from .core import DatabaseCore, DatabaseUnavailableError
from .birthdays import BirthdayRecord, BirthdaysMixin


class Database(
    BirthdaysMixin,
    DatabaseCore,
):
    """
    Complete database class combining all mixins.

    DatabaseCore must be last so its __init__ runs.
    """
    pass


__all__ = ["Database", "BirthdayRecord", "DatabaseUnavailableError"]
