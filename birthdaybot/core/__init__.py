"""
BirthdayBot - Core Package
==========================

Framework essentials: config, constants, colors, and logging.
"""

from birthdaybot.core.config import Config, ConfigError
from birthdaybot.core.logger import logger

__all__ = ["Config", "ConfigError", "logger"]
