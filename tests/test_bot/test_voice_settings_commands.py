"""Tests for the Discord side of .set, .preset and .engine."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from ttsbot.bot.handlers.voice_settings_commands import (
    engine_command,
    preset_command,
    set_command,
)
from ttsbot.models.voice_vox import VoiceVoxOptions, VoiceVoxSpeaker

from discord_doubles import AUTHOR_ID, CHANNEL_ID, member_in


@pytest.fixture
def ctx(bot):
    context = MagicMock()
    context.bot = bot
    context.author = member_in(CHANNEL_ID)
    context.send = AsyncMock()
    return context


async def test_set_saves_and_confirms(ctx, option_store):
    await set_command(ctx, "voicevox", "speaker=zundamon", "speed=1.2")

    stored = option_store.get(AUTHOR_ID)
    assert isinstance(stored, VoiceVoxOptions)
    assert stored.speaker is VoiceVoxSpeaker.ZUNDAMON
    assert ctx.send.await_args.args[0].startswith("Saved options:")


async def test_set_without_arguments_shows_usage(ctx, option_store):
    await set_command(ctx)

    ctx.send.assert_awaited_once_with("`.set {voicetext|voicevox} [key=value...]`")
    assert option_store.get(AUTHOR_ID) is option_store.default


async def test_preset_mentions_author(ctx, option_store):
    await preset_command(ctx, "takuya")

    reply = ctx.send.await_args.args[0]
    assert reply.startswith(f"Set <@{AUTHOR_ID}>'s preset:")
    assert option_store.get(AUTHOR_ID) is not option_store.default


async def test_engine_lists_speakers(ctx):
    await engine_command(ctx, "voicevox")

    assert "Available speakers:" in ctx.send.await_args.args[0]
