"""
Voice channel commands.

Contains:
- .join - Join the author's voice channel
- .leave - Leave the voice channel
- .mute / .unmute - Stop or resume reading messages aloud
- .stop - Stop the message being read
"""

import logging

from discord.ext import commands

from ...core.services import VOICE_CHANNELS

logger = logging.getLogger(__name__)

NOT_IN_VOICE = "Not in a voice channel"


@commands.guild_only()
async def join_command(ctx: commands.Context) -> None:
    """Handle .join command"""
    author_voice = getattr(ctx.author, "voice", None)
    if author_voice is None or author_voice.channel is None:
        await ctx.reply(NOT_IN_VOICE)
        return

    channel = author_voice.channel
    voice_client = ctx.guild.voice_client
    if voice_client is not None and voice_client.is_connected():
        await voice_client.move_to(channel)
    else:
        await channel.connect()

    ctx.bot.container.get(VOICE_CHANNELS).joined(ctx.guild.id, channel.id)
    logger.info(f"Joined voice channel {channel.id} in guild {ctx.guild.id}")


@commands.guild_only()
async def leave_command(ctx: commands.Context) -> None:
    """Handle .leave command"""
    voice_client = ctx.guild.voice_client
    if voice_client is None:
        await ctx.reply(NOT_IN_VOICE)
        return

    await voice_client.disconnect(force=False)
    ctx.bot.container.get(VOICE_CHANNELS).left(ctx.guild.id)
    ctx.bot.player.forget(ctx.guild.id)
    logger.info(f"Left voice channel in guild {ctx.guild.id}")
    await ctx.send("Left voice channel")


@commands.guild_only()
async def mute_command(ctx: commands.Context) -> None:
    """Handle .mute command"""
    voice_client = ctx.guild.voice_client
    if voice_client is None:
        await ctx.reply(NOT_IN_VOICE)
        return

    if not ctx.bot.player.mute(ctx.guild.id):
        await ctx.send("Already muted")
        return

    voice_client.stop()
    await ctx.guild.change_voice_state(channel=voice_client.channel, self_mute=True)
    await ctx.send("Now muted")


@commands.guild_only()
async def unmute_command(ctx: commands.Context) -> None:
    """Handle .unmute command"""
    voice_client = ctx.guild.voice_client
    if voice_client is None:
        await ctx.send("Not in a voice channel to unmute in")
        return

    ctx.bot.player.unmute(ctx.guild.id)
    await ctx.guild.change_voice_state(channel=voice_client.channel, self_mute=False)
    await ctx.send("Unmuted")


@commands.guild_only()
async def stop_command(ctx: commands.Context) -> None:
    """Handle .stop command"""
    voice_client = ctx.guild.voice_client
    if voice_client is None:
        await ctx.reply(NOT_IN_VOICE)
        return
    voice_client.stop()
