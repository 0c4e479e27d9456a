"""
Application configuration using Pydantic Settings.

Centralizes all configuration with environment variable support.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Discord
    discord_token: str = ""
    command_prefix: str = "."

    # TTS API keys
    voicetext_api_key: str = ""
    voicevox_api_key: str = ""

    # Database
    database_url: str = "sqlite+aiosqlite:///./data/ttsbot.db"

    # Playback volume applied to synthesized audio (1.0 = unchanged)
    playback_volume: float = 0.1

    # Timeouts (seconds)
    http_timeout: float = 30.0

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
