"""
BirthdayBot - Response Utilities
================================

Safe response helpers for Discord interactions.
Handles already-responded interactions gracefully.
"""

from typing import Optional

import discord

from birthdaybot.core.logger import logger


async def safe_send(
    interaction: discord.Interaction,
    content: Optional[str] = None,
    embed: Optional[discord.Embed] = None,
    ephemeral: bool = True,
) -> bool:
    """
    Safely send a response to an interaction.

    Uses a followup if the interaction was already responded to.

    Args:
        interaction: The Discord interaction
        content: Text content to send
        embed: Embed to send
        ephemeral: Whether the message should be ephemeral

    Returns:
        True if message was sent successfully, False otherwise
    """
    kwargs = {"ephemeral": ephemeral}
    if content is not None:
        kwargs["content"] = content
    if embed is not None:
        kwargs["embed"] = embed

    try:
        if not interaction.response.is_done():
            await interaction.response.send_message(**kwargs)
        else:
            await interaction.followup.send(**kwargs)
        return True
    except discord.HTTPException as e:
        logger.tree("Response Failed", [
            ("User", f"{interaction.user.name}"),
            ("Error", str(e)[:50]),
        ], emoji="❌")
        return False
