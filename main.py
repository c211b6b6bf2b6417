"""
BirthdayBot - Entry Point
=========================

Main entry point for the bot.
"""

import asyncio
import signal
import sys

from dotenv import load_dotenv

load_dotenv()

import discord  # noqa: E402

from birthdaybot.bot import BirthdayBot  # noqa: E402
from birthdaybot.context import AppContext  # noqa: E402
from birthdaybot.core.config import Config, ConfigError  # noqa: E402
from birthdaybot.core.logger import logger  # noqa: E402


def install_signal_handlers(bot: BirthdayBot) -> None:
    """Route SIGINT/SIGTERM to a graceful shutdown."""
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, bot.request_shutdown, sig)
        except NotImplementedError:
            # Not supported on Windows; Ctrl+C still raises KeyboardInterrupt
            logger.warning(f"Signal handler for {sig.name} unavailable on this platform")


async def main() -> int:
    """Main entry point."""
    try:
        config = Config.from_env()
    except ConfigError as e:
        logger.error(f"Failed to load config: {e}")
        return 1

    try:
        logger.set_log_dir(config.LOG_DIR)
    except OSError as e:
        logger.error(f"Cannot use log directory {config.LOG_DIR}: {e}")
        return 1

    try:
        context = AppContext.create(config)
    except (RuntimeError, OSError) as e:
        logger.error_tree("DB Connection Failed", e, [
            ("DSN", config.DSN),
        ])
        return 1

    bot = BirthdayBot(context)
    install_signal_handlers(bot)
    logger.info("Press Ctrl+C to exit")

    try:
        await bot.start(config.TOKEN)
        if bot.shutdown_task is not None:
            await bot.shutdown_task
    except discord.LoginFailure as e:
        logger.error_tree("Cannot Open Session", e)
        return 1
    except discord.HTTPException as e:
        logger.error_tree("Discord Request Failed", e)
        return 1
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt")
    finally:
        if not bot.is_closed():
            await bot.close()

    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
