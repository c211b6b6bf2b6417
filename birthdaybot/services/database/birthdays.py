"""
BirthdayBot - Database Birthdays Mixin
======================================

Birthday tracking database operations.
"""

import sqlite3
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from birthdaybot.core.logger import logger
from birthdaybot.utils.dates import format_birthday, from_epoch

from .core import DatabaseUnavailableError


@dataclass(frozen=True)
class BirthdayRecord:
    """A stored birthday. birthdate is UTC epoch seconds in SENTINEL_YEAR."""

    user_id: str
    birthdate: int

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "BirthdayRecord":
        return cls(user_id=row["id"], birthdate=row["birthdate"])

    @property
    def birthday(self) -> date:
        return from_epoch(self.birthdate)

    @property
    def month(self) -> int:
        return self.birthday.month

    @property
    def day(self) -> int:
        return self.birthday.day

    @property
    def display(self) -> str:
        return format_birthday(self.birthday)


class BirthdaysMixin:
    """Mixin for birthday database operations."""

    # =========================================================================
    # Birthday CRUD
    # =========================================================================

    def set_birthday(self, user_id: str, birthdate: int) -> bool:
        """
        Set or update a user's birthday.

        Args:
            user_id: Discord user ID
            birthdate: UTC epoch seconds from utils.dates.to_epoch

        Returns:
            True if committed, False otherwise
        """
        try:
            with self._get_conn() as conn:
                conn.execute("""
                    INSERT INTO users (id, birthdate)
                    VALUES (?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        birthdate = excluded.birthdate
                """, (user_id, birthdate))

            logger.tree("DB: Birthday Set", [
                ("ID", user_id),
                ("Birthdate", str(birthdate)),
            ], emoji="🎂")
            return True

        except (sqlite3.Error, DatabaseUnavailableError) as e:
            logger.error_tree("DB: Set Birthday Error", e, [
                ("ID", user_id),
                ("Birthdate", str(birthdate)),
            ])
            return False

    def get_birthday(self, user_id: str) -> Optional[BirthdayRecord]:
        """
        Get a user's birthday.

        Args:
            user_id: Discord user ID

        Returns:
            The record, or None if not found/error
        """
        try:
            with self._get_conn() as conn:
                row = conn.execute(
                    "SELECT id, birthdate FROM users WHERE id = ?", (user_id,)
                ).fetchone()
                return BirthdayRecord.from_row(row) if row else None

        except (sqlite3.Error, DatabaseUnavailableError) as e:
            logger.error_tree("DB: Get Birthday Error", e, [
                ("ID", user_id),
            ])
            return None

    def find_birthdays_on(self, month: int, day: int) -> List[BirthdayRecord]:
        """
        Get all users whose birthday falls on a month/day.

        The stored year is ignored; only the UTC month and day are compared.

        Args:
            month: Month (1-12)
            day: Day of month (1-31)

        Returns:
            Matching records, empty list on error
        """
        try:
            with self._get_conn() as conn:
                rows = conn.execute("""
                    SELECT id, birthdate FROM users
                    WHERE strftime('%m-%d', birthdate, 'unixepoch') = ?
                    ORDER BY id
                """, (f"{month:02d}-{day:02d}",)).fetchall()
                records = [BirthdayRecord.from_row(row) for row in rows]

            if records:
                logger.tree("DB: Birthdays Found", [
                    ("Date", f"{month}/{day}"),
                    ("Count", str(len(records))),
                ], emoji="🎂")

            return records

        except (sqlite3.Error, DatabaseUnavailableError) as e:
            logger.error_tree("DB: Find Birthdays Error", e, [
                ("Date", f"{month}/{day}"),
            ])
            return []

    def get_birthday_count(self) -> int:
        """
        Get the number of registered birthdays.

        Returns:
            Count of users with a birthday, 0 on error
        """
        try:
            with self._get_conn() as conn:
                row = conn.execute("SELECT COUNT(*) AS total FROM users").fetchone()
                return row["total"] if row else 0

        except (sqlite3.Error, DatabaseUnavailableError) as e:
            logger.error_tree("DB: Birthday Count Error", e)
            return 0
