"""
Tests for config validation and the redacted summary.

Covers:
- Required secret presence checks
- DATABASE_URL format and async driver checks
- Playback volume, timeout and prefix checks
- Redacted config summary output
"""

import logging

import pytest

from ttsbot.core.config import Settings
from ttsbot.core.config_validator import (
    _db_type,
    _redact,
    log_config_summary,
    validate_config,
)


def _make_settings(**overrides) -> Settings:
    """Create a Settings instance with sensible test defaults, applying overrides."""
    defaults = {
        "discord_token": "discord-token-123",
        "voicetext_api_key": "voicetext-key-456",
        "voicevox_api_key": "voicevox-key-789",
        "database_url": "sqlite+aiosqlite:///./data/test.db",
        "environment": "development",
    }
    defaults.update(overrides)
    return Settings(**defaults)


class TestRequiredSecrets:
    @pytest.mark.parametrize(
        "field, env_name",
        [
            ("discord_token", "DISCORD_TOKEN"),
            ("voicetext_api_key", "VOICETEXT_API_KEY"),
            ("voicevox_api_key", "VOICEVOX_API_KEY"),
        ],
    )
    def test_missing_secret(self, field, env_name):
        errors = validate_config(_make_settings(**{field: "  "}))
        assert any(env_name in e for e in errors)

    def test_valid_settings(self):
        assert validate_config(_make_settings()) == []


class TestDatabaseUrl:
    def test_empty(self):
        errors = validate_config(_make_settings(database_url=""))
        assert any("DATABASE_URL is required" in e for e in errors)

    def test_not_a_url(self):
        errors = validate_config(_make_settings(database_url="data/options.db"))
        assert any("format is invalid" in e for e in errors)

    @pytest.mark.parametrize(
        "url", ["sqlite:///./data/x.db", "postgresql://localhost/ttsbot", "mysql+pymysql://h/db"]
    )
    def test_sync_driver_rejected(self, url):
        errors = validate_config(_make_settings(database_url=url))
        assert any("async driver" in e for e in errors)

    @pytest.mark.parametrize(
        "url",
        [
            "sqlite+aiosqlite:///:memory:",
            "postgresql+asyncpg://user:pw@localhost/ttsbot",
            "mysql+aiomysql://user:pw@localhost/ttsbot",
        ],
    )
    def test_async_driver_accepted(self, url):
        assert validate_config(_make_settings(database_url=url)) == []


class TestOtherFields:
    @pytest.mark.parametrize("volume", [-0.1, 2.5])
    def test_volume_out_of_range(self, volume):
        errors = validate_config(_make_settings(playback_volume=volume))
        assert any("PLAYBACK_VOLUME" in e for e in errors)

    def test_timeout_must_be_positive(self):
        errors = validate_config(_make_settings(http_timeout=0))
        assert any("HTTP_TIMEOUT" in e for e in errors)

    @pytest.mark.parametrize("prefix", ["", " ."])
    def test_bad_prefix(self, prefix):
        errors = validate_config(_make_settings(command_prefix=prefix))
        assert any("COMMAND_PREFIX" in e for e in errors)

    def test_multiple_errors_reported_together(self):
        errors = validate_config(
            _make_settings(discord_token="", database_url="nope", playback_volume=9)
        )
        assert len(errors) == 3


class TestSummary:
    def test_redact(self):
        assert _redact("") == "<empty>"
        assert _redact("abcdefgh") == "abcd***"

    def test_db_type(self):
        assert _db_type("postgresql+asyncpg://h/db") == "postgresql"
        assert _db_type("") == "none"

    def test_summary_never_logs_secrets(self, caplog):
        settings = _make_settings()
        with caplog.at_level(logging.INFO, logger="ttsbot.core.config_validator"):
            log_config_summary(settings)

        text = caplog.text
        assert "database=sqlite" in text
        assert "disc***" in text
        assert settings.discord_token not in text
        assert settings.voicetext_api_key not in text
        assert settings.voicevox_api_key not in text
