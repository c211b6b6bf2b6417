"""
BirthdayBot - Birthday Command
==============================

Register your birthday to be greeted on the day.
"""

from enum import Enum

import discord
from discord import app_commands
from discord.ext import commands

from birthdaybot.core.colors import COLOR_ERROR, COLOR_SUCCESS
from birthdaybot.core.constants import BIRTHDAY_INPUT_EXAMPLE, BIRTHDAY_INPUT_MAX_LENGTH
from birthdaybot.core.logger import logger
from birthdaybot.utils.responses import safe_send


class CommandName(str, Enum):
    """Slash commands registered by the bot."""

    SET_BIRTHDAY = "set-birthday"


class BirthdayCog(commands.Cog):
    """
    Birthday commands for registering your birthday.

    DESIGN:
        Users register with /set-birthday <date>. The date is parsed and
        stored by the birthday service; the daily check greets them on
        the day. Errors are answered ephemerally and change nothing.
    """

    def __init__(self, bot: commands.Bot) -> None:
        """
        Initialize the birthday cog.

        Args:
            bot: Main bot instance for service access.
        """
        self.bot = bot

    @app_commands.command(
        name=CommandName.SET_BIRTHDAY.value,
        description="Set your birthday to be greeted on the day",
    )
    @app_commands.describe(
        date=f"Your birthday! In MMM DD (e.g. {BIRTHDAY_INPUT_EXAMPLE}), please!"
    )
    async def set_birthday(
        self,
        interaction: discord.Interaction,
        date: app_commands.Range[str, 1, BIRTHDAY_INPUT_MAX_LENGTH],
    ) -> None:
        """Set your birthday."""
        service = getattr(self.bot, "birthday_service", None)
        if service is None:
            await safe_send(interaction, "Birthday feature is not available.")
            logger.tree("Birthday Set Rejected", [
                ("User", interaction.user.name),
                ("ID", str(interaction.user.id)),
                ("Reason", "Service not ready"),
            ], emoji="⚠️")
            return

        success, message = await service.set_birthday(interaction.user, date)

        if success:
            embed = discord.Embed(
                title="Birthday Registered!",
                description=message,
                color=COLOR_SUCCESS,
            )
            embed.set_thumbnail(url=interaction.user.display_avatar.url)
            await safe_send(interaction, embed=embed, ephemeral=False)
        else:
            embed = discord.Embed(
                title="There was an error responding to your command",
                description=message,
                color=COLOR_ERROR,
            )
            await safe_send(interaction, embed=embed)

            logger.tree("Birthday Set Failed", [
                ("User", interaction.user.name),
                ("ID", str(interaction.user.id)),
                ("Reason", message[:100]),
            ], emoji="⚠️")


async def setup(bot: commands.Bot) -> None:
    """Add the cog to the bot."""
    await bot.add_cog(BirthdayCog(bot))
    logger.tree("Command Loaded", [
        ("Name", CommandName.SET_BIRTHDAY.value),
    ], emoji="✅")
