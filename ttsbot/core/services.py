"""
Service Registry - Central service configuration and registration.

Wires up all application services with their dependencies. Services are
registered lazily and instantiated on first access.

Usage:
    from ttsbot.core.services import OPTION_STORE, setup_services

    container = setup_services(ServiceContainer(), settings)
    store = await container.get_async(OPTION_STORE)
"""

import logging
from typing import Optional

from .config import Settings, get_settings
from .container import ServiceContainer

logger = logging.getLogger(__name__)

SETTINGS = "settings"
OPTION_STORE = "option_store"
TTS = "tts"
LANGUAGE_GATE = "language_gate"
VOICE_CHANNELS = "voice_channels"


def setup_services(
    container: ServiceContainer, settings: Optional[Settings] = None
) -> ServiceContainer:
    """
    Register all application services in ``container``.

    Nothing is created here; the option store connects to the database
    the first time it is requested with ``get_async``.
    """
    container.register_instance(SETTINGS, settings or get_settings())

    # ========================================================================
    # Storage
    # ========================================================================

    async def create_option_store(c):
        from ..services.option_store import OptionStore

        return await OptionStore.connect(c.get(SETTINGS).database_url)

    container.register_async(OPTION_STORE, create_option_store)

    # ========================================================================
    # External API Services
    # ========================================================================

    def create_tts_client(c):
        from ..services.tts_service import TTSClient

        return TTSClient.from_settings(c.get(SETTINGS))

    container.register(TTS, create_tts_client)

    # ========================================================================
    # Message handling
    # ========================================================================

    def create_language_gate(c):
        from .language import LanguageGate

        return LanguageGate()

    container.register(LANGUAGE_GATE, create_language_gate)

    def create_voice_channels(c):
        from ..bot.voice_channels import VoiceChannelRegistry

        return VoiceChannelRegistry()

    container.register(VOICE_CHANNELS, create_voice_channels)

    logger.info("All services registered")
    return container
