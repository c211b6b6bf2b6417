"""
BirthdayBot - Birthday Service
==============================

Birthday registration and the daily birthday announcement.

Features:
- Users set their birthday via `/set-birthday`
- Daily check at midnight UTC for birthdays
- Announcement in the configured channel, or a DM when no channel is set
"""

import asyncio
import random
from datetime import date, datetime, time as dt_time, timezone
from typing import TYPE_CHECKING, List, Optional, Tuple

import discord
from discord.ext import tasks

from birthdaybot.core.colors import COLOR_CAKE
from birthdaybot.core.constants import BIRTHDAY_MESSAGES, BOT_BIRTHDAY_MESSAGE
from birthdaybot.core.logger import logger
from birthdaybot.services.database import BirthdayRecord
from birthdaybot.utils.dates import (
    InvalidBirthdayError,
    format_birthday,
    matching_days,
    parse_birthday,
    to_epoch,
)

if TYPE_CHECKING:
    from birthdaybot.bot import BirthdayBot


# Daily check time
BIRTHDAY_CHECK_TIME = dt_time(hour=0, minute=0, tzinfo=timezone.utc)


class BirthdayService:
    """
    Service for birthday registration and announcements.

    DESIGN:
        Birthdays are stored as epoch seconds in a fixed leap year.
        A daily loop at 00:00 UTC looks up today's month/day and
        greets every match. Nothing is retried; failures are logged.
    """

    def __init__(self, bot: "BirthdayBot") -> None:
        """
        Initialize the birthday service.

        Args:
            bot: Main bot instance for Discord API and context access.
        """
        self.bot = bot
        self.context = bot.context

    async def setup(self) -> None:
        """Start the daily birthday check."""
        config = self.context.config

        if not self.birthday_check.is_running():
            self.birthday_check.start()

        count = await asyncio.to_thread(self.context.db.get_birthday_count)

        logger.tree("Birthday Service Ready", [
            ("Announce Channel", str(config.BIRTHDAY_CHANNEL_ID) if config.BIRTHDAY_CHANNEL_ID else "DM"),
            # Read from config but not acted on yet
            ("Birthday Role", config.BIRTHDAY_ROLE or "None"),
            ("Registered Birthdays", str(count)),
            ("Daily Check", "00:00 UTC"),
        ], emoji="🎂")

    def stop(self) -> None:
        """Stop the birthday service."""
        if self.birthday_check.is_running():
            self.birthday_check.cancel()
        logger.tree("Birthday Service Stopped", [], emoji="🛑")

    # =========================================================================
    # Scheduled Tasks
    # =========================================================================

    @tasks.loop(time=BIRTHDAY_CHECK_TIME)
    async def birthday_check(self) -> None:
        """Daily birthday check - announce today's birthdays."""
        await self.check_birthdays()

    @birthday_check.before_loop
    async def before_birthday_check(self) -> None:
        """Wait for bot to be ready before starting birthday check."""
        await self.bot.wait_until_ready()

    # =========================================================================
    # Public Methods
    # =========================================================================

    async def find_birthdays(self, today: date) -> List[BirthdayRecord]:
        """
        All birthdays celebrated on `today`.

        Args:
            today: The UTC calendar day to look up.

        Returns:
            Matching records, including Feb 29 birthdays on Feb 28 of non-leap years.
        """
        records: List[BirthdayRecord] = []
        for month, day in matching_days(today):
            records.extend(
                await asyncio.to_thread(self.context.db.find_birthdays_on, month, day)
            )
        return records

    async def check_birthdays(
        self,
        today: Optional[date] = None,
        announce: bool = True,
    ) -> List[BirthdayRecord]:
        """
        Look up today's birthdays and greet each one.

        Args:
            today: Day to check. Defaults to the current UTC date.
            announce: Send greetings. When False, matches are only logged.

        Returns:
            The records that matched.
        """
        if today is None:
            today = datetime.now(timezone.utc).date()

        logger.tree("Birthday Check Starting", [
            ("Date", format_birthday(today)),
            ("Announce", "Yes" if announce else "No"),
        ], emoji="🎂")

        records = await self.find_birthdays(today)

        announced = 0
        for record in records:
            logger.tree("Birthday Today", [
                ("ID", record.user_id),
                ("Birthday", record.display),
            ], emoji="🎉")
            if announce and await self.announce_birthday(record):
                announced += 1

        logger.tree("Birthday Check Complete", [
            ("Birthdays Today", str(len(records))),
            ("Announced", str(announced)),
        ], emoji="🎂")
        return records

    async def set_birthday(self, user: discord.abc.User, text: str) -> Tuple[bool, str]:
        """
        Parse and store a user's birthday.

        Args:
            user: The user setting their birthday.
            text: Birthday as typed, e.g. "Jun 06".

        Returns:
            Tuple of (success, message)
        """
        try:
            birthday = parse_birthday(text)
        except InvalidBirthdayError as e:
            logger.tree("Birthday Parse Failed", [
                ("User", user.name),
                ("ID", str(user.id)),
                ("Input", text[:50]),
            ], emoji="⚠️")
            return False, str(e)

        success = await asyncio.to_thread(
            self.context.db.set_birthday, str(user.id), to_epoch(birthday)
        )
        if not success:
            return False, "Failed to save your birthday. Please try again later."

        logger.tree("Birthday Set", [
            ("User", user.name),
            ("ID", str(user.id)),
            ("Birthday", format_birthday(birthday)),
        ], emoji="🎂")
        return True, (
            f"Success! {user.mention}, you have set your birthday to "
            f"**{format_birthday(birthday)}**."
        )

    async def get_birthday(self, user: discord.abc.User) -> Optional[BirthdayRecord]:
        """Get a user's stored birthday, or None."""
        return await asyncio.to_thread(self.context.db.get_birthday, str(user.id))

    def get_birthday_message(self, user_id: str) -> str:
        """
        Get the birthday message for a user.

        Args:
            user_id: The user whose birthday it is.

        Returns:
            The birthday message, already formatted.
        """
        if self.bot.user is not None and str(self.bot.user.id) == user_id:
            return BOT_BIRTHDAY_MESSAGE
        return random.choice(BIRTHDAY_MESSAGES).format(f"<@{user_id}>")

    async def announce_birthday(self, record: BirthdayRecord) -> bool:
        """
        Greet a user on their birthday.

        Posts in BIRTHDAY_CHANNEL_ID when configured, otherwise sends a DM.

        Returns:
            True if the greeting was delivered.
        """
        embed = discord.Embed(
            title="Happy Birthday! 🎂",
            description=self.get_birthday_message(record.user_id),
            color=COLOR_CAKE,
        )

        channel_id = self.context.config.BIRTHDAY_CHANNEL_ID
        try:
            if channel_id:
                channel = self.bot.get_channel(channel_id)
                if channel is None or not isinstance(channel, discord.abc.Messageable):
                    logger.tree("Birthday Announce Failed", [
                        ("ID", record.user_id),
                        ("Reason", "Announcement channel not found"),
                        ("Channel ID", str(channel_id)),
                    ], emoji="⚠️")
                    return False
                await channel.send(
                    content=f"<@{record.user_id}>",
                    embed=embed,
                    allowed_mentions=discord.AllowedMentions(users=True),
                )
                target = f"#{getattr(channel, 'name', channel_id)}"
            else:
                user_id = int(record.user_id)
                user = self.bot.get_user(user_id) or await self.bot.fetch_user(user_id)
                await user.send(embed=embed)
                target = "DM"

        except discord.Forbidden:
            logger.tree("Birthday Announce Failed", [
                ("ID", record.user_id),
                ("Reason", "Missing permissions or DMs disabled"),
            ], emoji="⚠️")
            return False
        except discord.NotFound:
            logger.tree("Birthday Announce Failed", [
                ("ID", record.user_id),
                ("Reason", "User not found"),
            ], emoji="⚠️")
            return False
        except discord.HTTPException as e:
            logger.tree("Birthday Announce Failed", [
                ("ID", record.user_id),
                ("Error", str(e)[:50]),
            ], emoji="❌")
            return False

        logger.tree("Birthday Announced", [
            ("ID", record.user_id),
            ("Target", target),
        ], emoji="📢")
        return True
