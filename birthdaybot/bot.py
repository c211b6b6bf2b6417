"""
BirthdayBot - Main Bot
======================

Discord bot that registers birthdays and greets members on the day.
"""

import asyncio
import signal
from typing import Optional

import discord
from discord.ext import commands

from birthdaybot.context import AppContext
from birthdaybot.core.logger import logger
from birthdaybot.services.birthday import BirthdayService


EXTENSIONS = (
    "birthdaybot.handlers.ready",
    "birthdaybot.commands.birthday",
)


class BirthdayBot(commands.Bot):
    """Main bot class for BirthdayBot."""

    def __init__(self, context: AppContext) -> None:
        intents = discord.Intents.default()

        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
            help_command=None,
        )

        self.context = context

        # Services
        self.birthday_service: Optional[BirthdayService] = None

        self._commands_registered = False
        self.shutdown_task: Optional[asyncio.Task] = None

    @property
    def command_guild(self) -> Optional[discord.Object]:
        """Guild that commands are synced to, or None for global commands."""
        guild_id = self.context.config.GUILD_ID
        return discord.Object(id=guild_id) if guild_id else None

    async def setup_hook(self) -> None:
        """Called when the bot is starting up."""
        for extension in EXTENSIONS:
            await self.load_extension(extension)

        self.birthday_service = BirthdayService(self)
        await self.birthday_service.setup()

        await self.register_commands()

    async def register_commands(self) -> None:
        """Sync slash commands to Discord. Failures propagate and abort startup."""
        guild = self.command_guild
        if guild is not None:
            self.tree.copy_global_to(guild=guild)
        synced = await self.tree.sync(guild=guild)
        self._commands_registered = True

        logger.tree("Commands Registered", [
            ("Scope", f"Guild {guild.id}" if guild else "Global"),
            ("Commands", ", ".join(cmd.name for cmd in synced) or "None"),
        ], emoji="📝")

    async def deregister_commands(self) -> None:
        """Remove this bot's slash commands from Discord."""
        guild = self.command_guild
        self.tree.clear_commands(guild=guild)
        await self.tree.sync(guild=guild)
        self._commands_registered = False

        logger.tree("Commands Deregistered", [
            ("Scope", f"Guild {guild.id}" if guild else "Global"),
        ], emoji="🧹")

    def request_shutdown(self, sig: signal.Signals) -> None:
        """Signal handler: close the bot once."""
        logger.tree("Shutdown Requested", [
            ("Signal", sig.name),
        ], emoji="🛑")
        if self.shutdown_task is None:
            self.shutdown_task = asyncio.create_task(self.close())

    async def close(self) -> None:
        """Clean up when bot is shutting down."""
        logger.info("Gracefully shutting down...")
        if self.birthday_service:
            self.birthday_service.stop()
        try:
            if self._commands_registered:
                await self.deregister_commands()
        except discord.HTTPException as e:
            logger.error_tree("Command Deregistration Failed", e)
            raise
        finally:
            await super().close()
