from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from discord_doubles import CHANNEL_ID, GUILD_ID
from ttsbot.bot.playback import GuildPlayer
from ttsbot.bot.voice_channels import VoiceChannelRegistry
from ttsbot.core.config import Settings
from ttsbot.core.container import ServiceContainer
from ttsbot.core.services import (
    LANGUAGE_GATE,
    OPTION_STORE,
    SETTINGS,
    TTS,
    VOICE_CHANNELS,
)


@pytest.fixture
def container(option_store):
    c = ServiceContainer()
    c.register_instance(SETTINGS, Settings(command_prefix=".", playback_volume=0.1))
    c.register_instance(OPTION_STORE, option_store)
    c.register_instance(VOICE_CHANNELS, VoiceChannelRegistry())

    gate = MagicMock()
    gate.should_speak.return_value = True
    c.register_instance(LANGUAGE_GATE, gate)

    tts = MagicMock()
    tts.request = AsyncMock(return_value=b"audio")
    c.register_instance(TTS, tts)
    return c


@pytest.fixture
def voice_client():
    vc = MagicMock()
    vc.guild = SimpleNamespace(id=GUILD_ID)
    vc.channel = SimpleNamespace(id=CHANNEL_ID)
    vc.is_connected.return_value = True
    vc.disconnect = AsyncMock()
    vc.move_to = AsyncMock()
    return vc


@pytest.fixture
def guild(voice_client):
    g = MagicMock()
    g.id = GUILD_ID
    g.voice_client = voice_client
    g.change_voice_state = AsyncMock()
    return g


@pytest.fixture
def bot(container):
    """Stand-in for TTSBot exposing what the handlers use."""
    player = GuildPlayer(volume=0.1)
    player.play = AsyncMock()
    return SimpleNamespace(
        container=container,
        settings=container.get(SETTINGS),
        player=player,
        user=SimpleNamespace(id=1, bot=True),
    )


