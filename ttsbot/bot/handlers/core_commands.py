"""
Core bot commands.

Contains:
- .ping - Liveness check
"""

from discord.ext import commands


async def ping_command(ctx: commands.Context) -> None:
    """Handle .ping command"""
    await ctx.send("Pong!")
