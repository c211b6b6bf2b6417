"""
BirthdayBot - Birthday Package
==============================

Birthday registration and daily announcements.
"""

from .service import BirthdayService, BIRTHDAY_CHECK_TIME

__all__ = [
    "BirthdayService",
    "BIRTHDAY_CHECK_TIME",
]
