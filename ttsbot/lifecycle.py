"""
Application lifecycle management.

Handles startup and shutdown of all subsystems:
- Configuration validation
- Service container setup
- Option store connection (fatal on failure)
- Discord bot start and graceful stop on SIGINT/SIGTERM
"""

import asyncio
import logging
import signal
import sys
from typing import Optional

from .bot.bot import TTSBot, create_bot
from .core.config import Settings
from .core.config_validator import log_config_summary, validate_config
from .core.container import ServiceContainer
from .core.services import (
    LANGUAGE_GATE,
    OPTION_STORE,
    TTS,
    VOICE_CHANNELS,
    setup_services,
)

logger = logging.getLogger(__name__)


async def startup(settings: Settings) -> ServiceContainer:
    """Validate config and create every service the bot needs.

    Exits the process on configuration errors. Storage errors
    (``StorageConnectionError``, ``OptionDecodeError``) propagate.
    """
    logger.info("TTS bot starting up...")

    config_errors = validate_config(settings)
    if config_errors:
        for err in config_errors:
            logger.error(f"Config validation error: {err}")
        logger.critical(
            "Aborting startup due to %d configuration error(s)", len(config_errors)
        )
        sys.exit(1)
    log_config_summary(settings)

    container = setup_services(ServiceContainer(), settings)

    try:
        store = await container.get_async(OPTION_STORE)
        logger.info(f"Option store connected ({len(store)} users)")
    except Exception as e:
        logger.error(f"Option store initialization failed: {e}")
        raise

    # Created eagerly so a broken install fails here rather than on the
    # first message.
    container.get(TTS)
    container.get(LANGUAGE_GATE)
    container.get(VOICE_CHANNELS)
    logger.info("Service container initialized")
    return container


async def shutdown(container: ServiceContainer, bot: Optional[TTSBot] = None) -> None:
    """Stop the bot and release HTTP and database resources."""
    logger.info("TTS bot shutting down...")

    if bot is not None and not bot.is_closed():
        await bot.close()
        logger.info("Discord connection closed")

    tts = container.peek(TTS)
    if tts is not None:
        await tts.close()

    store = container.peek(OPTION_STORE)
    if store is not None:
        await store.close()

    logger.info("Shutdown complete")


def _install_signal_handlers(stop: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except NotImplementedError:
            # Windows event loops do not support signal handlers
            logger.debug(f"Cannot install handler for {sig.name}")


async def run(settings: Settings) -> None:
    """Run the bot until it stops or a shutdown signal arrives."""
    container = await startup(settings)
    bot = create_bot(container)

    stop = asyncio.Event()
    _install_signal_handlers(stop)

    bot_task = asyncio.create_task(bot.start(settings.discord_token))
    stop_task = asyncio.create_task(stop.wait())
    try:
        done, _ = await asyncio.wait(
            {bot_task, stop_task}, return_when=asyncio.FIRST_COMPLETED
        )
        if bot_task in done:
            # Re-raises if the client crashed (e.g. invalid token)
            bot_task.result()
            logger.info("Discord client stopped")
        else:
            logger.info("Received shutdown signal")
    finally:
        stop_task.cancel()
        await shutdown(container, bot)
        if not bot_task.done():
            bot_task.cancel()
            try:
                await bot_task
            except asyncio.CancelledError:
                pass
