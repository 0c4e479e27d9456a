"""Which voice channel the bot has joined in each guild."""

from typing import Dict, Optional

from ..utils.rwlock import ReadWriteLock


class VoiceChannelRegistry:
    """guild id -> voice channel id the bot joined."""

    def __init__(self) -> None:
        self._channels: Dict[int, int] = {}
        self._lock = ReadWriteLock()

    def get(self, guild_id: int) -> Optional[int]:
        with self._lock.read():
            return self._channels.get(guild_id)

    def joined(self, guild_id: int, channel_id: int) -> None:
        with self._lock.write():
            self._channels[guild_id] = channel_id

    def left(self, guild_id: int) -> Optional[int]:
        with self._lock.write():
            return self._channels.pop(guild_id, None)

    def is_in(self, guild_id: int, channel_id: Optional[int]) -> bool:
        """True when the bot is in ``channel_id`` in that guild."""
        return channel_id is not None and self.get(guild_id) == channel_id

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._channels)
