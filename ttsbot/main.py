"""
Command-line entry point.

Usage:
    python -m ttsbot [--discord-token ...] [--database-url ...]

Every flag falls back to its environment variable (loaded from ``.env``
and ``.env.local`` when present).
"""

import argparse
import asyncio
import logging
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .core.config import Settings, get_settings
from .domain.errors import StorageError
from .lifecycle import run
from .utils.logging import setup_logging
from .version import __version__

logger = logging.getLogger(__name__)

# Flag name -> Settings field
_OVERRIDABLE = (
    "discord_token",
    "voicetext_api_key",
    "voicevox_api_key",
    "database_url",
    "log_level",
)


def load_env_files(root: Optional[Path] = None) -> None:
    """Load ``.env`` then ``.env.local`` (later files override earlier)."""
    root = root or Path.cwd()
    env_file = root / ".env"
    env_local = root / ".env.local"
    if env_file.exists():
        load_dotenv(env_file, override=False)
    if env_local.exists():
        load_dotenv(env_local, override=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ttsbot",
        description="Discord bot that reads Japanese messages aloud in voice channels.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--discord-token", help="Discord bot token [env: DISCORD_TOKEN]")
    parser.add_argument(
        "--voicetext-api-key", help="VoiceText Web API key [env: VOICETEXT_API_KEY]"
    )
    parser.add_argument(
        "--voicevox-api-key", help="su-shiki VOICEVOX API key [env: VOICEVOX_API_KEY]"
    )
    parser.add_argument(
        "--database-url",
        help="SQLAlchemy async database URL [env: DATABASE_URL]",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level [env: LOG_LEVEL]",
    )
    parser.add_argument(
        "--no-log-files",
        action="store_true",
        help="Log to the console only",
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Settings from the environment, with any given flags taking precedence."""
    overrides = {
        field: getattr(args, field)
        for field in _OVERRIDABLE
        if getattr(args, field, None) is not None
    }
    if not overrides:
        return get_settings()
    return Settings(**overrides)


def main(argv: Optional[List[str]] = None) -> None:
    load_env_files()
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args)

    setup_logging(log_level=settings.log_level, log_to_file=not args.no_log_files)
    logger.info(f"ttsbot {__version__}")

    try:
        asyncio.run(run(settings))
    except StorageError as e:
        logger.critical(f"Cannot start: {e}")
        raise SystemExit(1) from e
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    main()
