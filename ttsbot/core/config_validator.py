"""
Startup configuration validation and redacted summary logging.

Called at the start of ``lifecycle.startup`` to fail fast on
misconfiguration.
"""

import logging
import re
from typing import List

from .config import Settings

logger = logging.getLogger(__name__)

# Secrets that must be non-empty for the bot to function.
_REQUIRED_SECRETS = [
    ("discord_token", "DISCORD_TOKEN"),
    ("voicetext_api_key", "VOICETEXT_API_KEY"),
    ("voicevox_api_key", "VOICEVOX_API_KEY"),
]

# Minimal pattern: scheme://... or scheme:///...
_SQLALCHEMY_URL_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+\-.]*://")

# Drivers usable with SQLAlchemy's asyncio extension.
_ASYNC_DRIVERS = {"aiosqlite", "asyncpg", "psycopg", "aiomysql", "asyncmy"}

_MAX_PLAYBACK_VOLUME = 2.0


def validate_config(settings: Settings) -> List[str]:
    """
    Validate application configuration and return a list of error strings.

    An empty list means the configuration is valid.
    """
    errors: List[str] = []

    # -- Required secrets --------------------------------------------------
    for attr, env_name in _REQUIRED_SECRETS:
        value = getattr(settings, attr, "")
        if not value or not value.strip():
            errors.append(f"{env_name} is required but missing or empty")

    # -- DATABASE_URL format -----------------------------------------------
    db_url = (settings.database_url or "").strip()
    if not db_url:
        errors.append("DATABASE_URL is required but missing or empty")
    elif not _SQLALCHEMY_URL_RE.match(db_url):
        errors.append(
            f"DATABASE_URL format is invalid (expected SQLAlchemy URL like "
            f"'sqlite+aiosqlite:///...' or 'postgresql+asyncpg://...'): "
            f"'{db_url}'"
        )
    elif _driver(db_url) not in _ASYNC_DRIVERS:
        errors.append(
            f"DATABASE_URL must name an async driver "
            f"({', '.join(sorted(_ASYNC_DRIVERS))}): '{db_url}'"
        )

    # -- Command prefix ----------------------------------------------------
    prefix = settings.command_prefix
    if not prefix or prefix != prefix.strip():
        errors.append(
            "COMMAND_PREFIX must be non-empty and contain no surrounding spaces"
        )

    # -- Playback ----------------------------------------------------------
    if not 0.0 <= settings.playback_volume <= _MAX_PLAYBACK_VOLUME:
        errors.append(
            f"PLAYBACK_VOLUME must be between 0 and {_MAX_PLAYBACK_VOLUME}: "
            f"{settings.playback_volume}"
        )

    if settings.http_timeout <= 0:
        errors.append(f"HTTP_TIMEOUT must be positive: {settings.http_timeout}")

    return errors


def _driver(database_url: str) -> str:
    """Return the driver part of a SQLAlchemy URL ("" when absent)."""
    scheme = database_url.split("://")[0]
    return scheme.split("+")[1].lower() if "+" in scheme else ""


def _redact(secret: str) -> str:
    """Return first 4 characters followed by '***', or '<empty>' if blank."""
    if not secret:
        return "<empty>"
    return secret[:4] + "***"


def _db_type(database_url: str) -> str:
    """Extract the database backend name from a SQLAlchemy URL."""
    if not database_url:
        return "none"
    scheme = database_url.split("://")[0] if "://" in database_url else database_url
    # e.g. "sqlite+aiosqlite" -> "sqlite", "postgresql+asyncpg" -> "postgresql"
    return scheme.split("+")[0].lower()


def log_config_summary(settings: Settings) -> None:
    """Log an INFO-level summary of loaded configuration with secrets redacted."""
    summary_lines = [
        f"environment={settings.environment}",
        f"database={_db_type(settings.database_url)}",
        f"prefix={settings.command_prefix}",
        f"playback_volume={settings.playback_volume}",
        f"discord_token={_redact(settings.discord_token)}",
        f"voicetext_key={_redact(settings.voicetext_api_key)}",
        f"voicevox_key={_redact(settings.voicevox_api_key)}",
    ]
    logger.info("Config loaded: %s", " | ".join(summary_lines))
