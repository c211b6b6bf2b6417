"""
BirthdayBot - Application Context
=================================

Shared handles built once at startup and passed to the bot.
"""

from dataclasses import dataclass

from birthdaybot.core.config import Config
from birthdaybot.services.database import Database


@dataclass
class AppContext:
    """Configuration and storage shared by commands and services."""

    config: Config
    db: Database

    @classmethod
    def create(cls, config: Config) -> "AppContext":
        """
        Open the database named by config.DSN.

        Raises:
            RuntimeError: If the database cannot be initialized.
        """
        db = Database(config.DSN)
        db.require_healthy()
        return cls(config=config, db=db)
