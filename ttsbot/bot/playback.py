"""
Voice playback of synthesized audio.

Audio bytes are piped through ffmpeg (``discord.FFmpegPCMAudio`` with
``pipe=True``) so no temporary files are written. Messages in the same
guild are played one after another.
"""

import asyncio
import io
import logging
from typing import Dict, Optional, Set

import discord

logger = logging.getLogger(__name__)


class GuildPlayer:
    """Plays audio clips on a guild's voice client, one at a time."""

    def __init__(self, volume: float = 0.1) -> None:
        self.volume = volume
        self._locks: Dict[int, asyncio.Lock] = {}
        self._muted: Set[int] = set()

    def _lock(self, guild_id: int) -> asyncio.Lock:
        lock = self._locks.get(guild_id)
        if lock is None:
            lock = self._locks[guild_id] = asyncio.Lock()
        return lock

    def make_source(self, audio: bytes) -> discord.AudioSource:
        return discord.PCMVolumeTransformer(
            discord.FFmpegPCMAudio(io.BytesIO(audio), pipe=True),
            volume=self.volume,
        )

    async def play(self, voice_client: discord.VoiceClient, audio: bytes) -> None:
        """Play ``audio`` and wait until it finishes or is stopped."""
        guild_id = voice_client.guild.id
        async with self._lock(guild_id):
            if guild_id in self._muted:
                logger.debug(f"Guild {guild_id} is muted, skipping")
                return
            if not voice_client.is_connected():
                logger.info(f"Voice client for guild {guild_id} disconnected, skipping")
                return

            loop = asyncio.get_running_loop()
            finished = loop.create_future()

            def after(error: Optional[Exception]) -> None:
                # Runs on discord.py's audio thread
                loop.call_soon_threadsafe(_resolve, finished, error)

            voice_client.play(self.make_source(audio), after=after)
            error = await finished
            if error is not None:
                logger.error(f"Playback failed in guild {guild_id}: {error}")

    def is_muted(self, guild_id: int) -> bool:
        return guild_id in self._muted

    def mute(self, guild_id: int) -> bool:
        """Stop sending audio to the guild. Returns False if already muted."""
        if guild_id in self._muted:
            return False
        self._muted.add(guild_id)
        return True

    def unmute(self, guild_id: int) -> None:
        self._muted.discard(guild_id)

    def forget(self, guild_id: int) -> None:
        self._locks.pop(guild_id, None)
        self._muted.discard(guild_id)


def _resolve(future: asyncio.Future, error: Optional[Exception]) -> None:
    if not future.done():
        future.set_result(error)
