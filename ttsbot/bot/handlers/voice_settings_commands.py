"""
Voice settings commands.

Contains:
- .set {voicetext|voicevox} key=value... - Configure your own voice
- .preset {name} - Switch to a named preset
- .engine {name} - Show an engine's links and speakers
"""

import logging

from discord.ext import commands

from ...core.services import OPTION_STORE
from ...services import option_commands

logger = logging.getLogger(__name__)


async def set_command(ctx: commands.Context, *args: str) -> None:
    """Handle .set command"""
    logger.info(f"Set command from user {ctx.author.id}: {list(args)}")
    reply = await option_commands.set_command(
        ctx.bot.container.get(OPTION_STORE),
        ctx.author.id,
        args,
        prefix=ctx.bot.settings.command_prefix,
    )
    await ctx.send(reply)


async def preset_command(ctx: commands.Context, *args: str) -> None:
    """Handle .preset command"""
    reply = await option_commands.preset_command(
        ctx.bot.container.get(OPTION_STORE),
        ctx.author.id,
        ctx.author.mention,
        args,
    )
    await ctx.send(reply)


async def engine_command(ctx: commands.Context, *args: str) -> None:
    """Handle .engine command"""
    await ctx.send(
        option_commands.engine_command(args, prefix=ctx.bot.settings.command_prefix)
    )
