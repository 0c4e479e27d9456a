"""Tests for application startup and shutdown."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from ttsbot.core.config import Settings
from ttsbot.core.services import LANGUAGE_GATE, OPTION_STORE, TTS, VOICE_CHANNELS
from ttsbot.domain.errors import OptionDecodeError
from ttsbot.lifecycle import shutdown, startup


def _settings(**overrides) -> Settings:
    values = {
        "discord_token": "token",
        "voicetext_api_key": "vt",
        "voicevox_api_key": "vv",
        "database_url": "sqlite+aiosqlite:///:memory:",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(autouse=True)
def _fake_detector():
    with patch("ttsbot.core.language.LanguageDetectorBuilder"):
        yield


async def test_startup_creates_every_service():
    container = await startup(_settings())
    try:
        for name in (OPTION_STORE, TTS, LANGUAGE_GATE, VOICE_CHANNELS):
            assert container.peek(name) is not None
    finally:
        await shutdown(container)


async def test_startup_exits_on_invalid_config():
    with pytest.raises(SystemExit) as exc_info:
        await startup(_settings(discord_token=""))
    assert exc_info.value.code == 1


async def test_startup_propagates_storage_errors():
    with patch(
        "ttsbot.services.option_store.OptionStore.connect",
        AsyncMock(side_effect=OptionDecodeError(1, "bad row")),
    ):
        with pytest.raises(OptionDecodeError):
            await startup(_settings())


async def test_shutdown_closes_bot_tts_and_store():
    container = await startup(_settings())
    store = container.peek(OPTION_STORE)
    tts = container.peek(TTS)
    store.close = AsyncMock()
    tts.close = AsyncMock()
    bot = MagicMock()
    bot.is_closed.return_value = False
    bot.close = AsyncMock()

    await shutdown(container, bot)

    bot.close.assert_awaited_once()
    tts.close.assert_awaited_once()
    store.close.assert_awaited_once()
