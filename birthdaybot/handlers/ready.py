"""
BirthdayBot - Ready Handler
===========================

Handles bot startup events.
"""

import discord
from discord.ext import commands

from birthdaybot.core.logger import logger


class ReadyHandler(commands.Cog):
    """Handles bot ready event."""

    def __init__(self, bot):
        self.bot = bot
        self._startup_checked = False

    @commands.Cog.listener()
    async def on_ready(self):
        """Called when the bot is ready."""
        logger.tree("Bot Ready", [
            ("User", str(self.bot.user)),
            ("ID", str(self.bot.user.id)),
            ("Guilds", str(len(self.bot.guilds))),
        ], emoji="🚀")

        # on_ready fires again after reconnects; only preview once
        if not self._startup_checked and self.bot.birthday_service:
            self._startup_checked = True
            await self.bot.birthday_service.check_birthdays(announce=False)

        await self.bot.change_presence(
            activity=discord.Activity(
                type=discord.ActivityType.watching,
                name="for birthdays"
            )
        )


async def setup(bot):
    await bot.add_cog(ReadyHandler(bot))
