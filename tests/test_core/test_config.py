"""Tests for environment-driven settings."""

from ttsbot.core.config import Settings, get_settings


def test_defaults(monkeypatch):
    for name in ("DATABASE_URL", "COMMAND_PREFIX", "PLAYBACK_VOLUME", "HTTP_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.database_url == "sqlite+aiosqlite:///./data/ttsbot.db"
    assert settings.command_prefix == "."
    assert settings.playback_volume == 0.1
    assert settings.http_timeout == 30.0


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("DISCORD_TOKEN", "from-env")
    monkeypatch.setenv("PLAYBACK_VOLUME", "0.5")

    settings = Settings(_env_file=None)

    assert settings.discord_token == "from-env"
    assert settings.playback_volume == 0.5


def test_init_arguments_override_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///env.db")
    settings = Settings(_env_file=None, database_url="sqlite+aiosqlite:///flag.db")
    assert settings.database_url == "sqlite+aiosqlite:///flag.db"


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
