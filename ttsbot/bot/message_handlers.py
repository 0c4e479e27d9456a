"""
Event handlers that read chat messages aloud.

A message is spoken only when the bot and its author share a voice
channel and the text is detected as Japanese. Failures are logged and
never propagate into discord.py's event loop.
"""

import logging
from typing import Optional

import discord

from ..core.services import LANGUAGE_GATE, OPTION_STORE, TTS, VOICE_CHANNELS
from ..domain.errors import SynthesisFailure
from ..utils.logging import PlaybackLogContext

logger = logging.getLogger(__name__)


def _voice_channel_id(member) -> Optional[int]:
    voice = getattr(member, "voice", None)
    if voice is None or voice.channel is None:
        return None
    return voice.channel.id


async def handle_message(bot, message: discord.Message) -> None:
    """Speak ``message`` in the guild's voice channel if it qualifies."""
    if message.content.startswith(bot.settings.command_prefix):
        return
    if message.author == bot.user:
        return
    guild = message.guild
    if guild is None:
        return

    registry = bot.container.get(VOICE_CHANNELS)
    if not registry.is_in(guild.id, _voice_channel_id(message.author)):
        return

    voice_client = guild.voice_client
    if voice_client is None:
        return

    text = message.clean_content
    if not bot.container.get(LANGUAGE_GATE).should_speak(text):
        return

    options = bot.container.get(OPTION_STORE).get(message.author.id)
    try:
        with PlaybackLogContext(
            "speak",
            guild_id=guild.id,
            user_id=message.author.id,
            engine=str(options.engine),
            characters=len(text),
        ):
            audio = await bot.container.get(TTS).request(text, options)
            await bot.player.play(voice_client, audio)
    except SynthesisFailure as e:
        logger.warning(f"Could not synthesize message {message.id}: {e}")
    except discord.DiscordException as e:
        logger.error(f"Could not play message {message.id}: {e}")


async def handle_voice_state_update(
    bot,
    member: discord.Member,
    before: discord.VoiceState,
    after: discord.VoiceState,
) -> None:
    """Leave the voice channel once no humans remain in it."""
    guild = member.guild
    registry = bot.container.get(VOICE_CHANNELS)

    if member == bot.user and after.channel is None:
        # Disconnected by someone else
        if registry.left(guild.id) is not None:
            bot.player.forget(guild.id)
            logger.info(f"Removed from voice in guild {guild.id}")
        return

    channel = before.channel
    if channel is None or not registry.is_in(guild.id, channel.id):
        return
    if after.channel is not None and after.channel.id == channel.id:
        return

    if any(not m.bot for m in channel.members):
        return

    voice_client = guild.voice_client
    if voice_client is not None:
        await voice_client.disconnect(force=False)
    registry.left(guild.id)
    bot.player.forget(guild.id)
    logger.info(f"Voice channel {channel.id} in guild {guild.id} is empty, left")
