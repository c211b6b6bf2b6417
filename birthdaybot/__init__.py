"""
BirthdayBot
===========

Discord bot that remembers member birthdays and announces them daily.
"""

__version__ = "1.0.0"
