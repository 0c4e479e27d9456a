"""
Service container for one bot run.

``lifecycle.startup`` builds a container, ``setup_services`` fills it with
lazy factories, and the bot resolves services from it by name. Every
service is created at most once per container.

Usage:
    container = ServiceContainer()
    container.register(TTS, lambda c: TTSClient.from_settings(c.get(SETTINGS)))
    container.register_async(OPTION_STORE, create_option_store)

    store = await container.get_async(OPTION_STORE)
    tts = container.get(TTS)
"""

import logging
from typing import Any, Awaitable, Callable, Dict, NamedTuple, Optional

logger = logging.getLogger(__name__)

Factory = Callable[["ServiceContainer"], Any]
AsyncFactory = Callable[["ServiceContainer"], Awaitable[Any]]


class _Registration(NamedTuple):
    factory: Callable[["ServiceContainer"], Any]
    is_async: bool


class ServiceContainer:
    """Name -> lazily created service."""

    def __init__(self) -> None:
        self._registrations: Dict[str, _Registration] = {}
        self._instances: Dict[str, Any] = {}

    def register(self, name: str, factory: Factory) -> None:
        """Register ``factory(container)``, called on the first ``get``."""
        self._registrations[name] = _Registration(factory, is_async=False)
        self._instances.pop(name, None)
        logger.debug(f"Registered service: {name}")

    def register_async(self, name: str, factory: AsyncFactory) -> None:
        """Register a coroutine factory, awaited on the first ``get_async``."""
        self._registrations[name] = _Registration(factory, is_async=True)
        self._instances.pop(name, None)
        logger.debug(f"Registered async service: {name}")

    def register_instance(self, name: str, instance: Any) -> None:
        self._registrations.pop(name, None)
        self._instances[name] = instance
        logger.debug(f"Registered instance: {name}")

    def get(self, name: str) -> Any:
        """
        Return the service, creating it on first access.

        Raises:
            KeyError: The service is not registered.
            RuntimeError: The service has an async factory and has not been
                created with ``get_async`` yet.
        """
        if name in self._instances:
            return self._instances[name]

        registration = self._lookup(name)
        if registration.is_async:
            raise RuntimeError(f"Service '{name}' must be created with get_async()")

        instance = self._instances[name] = registration.factory(self)
        logger.debug(f"Created service: {name}")
        return instance

    async def get_async(self, name: str) -> Any:
        """Like ``get``, but also awaits async factories."""
        if name in self._instances:
            return self._instances[name]

        registration = self._lookup(name)
        if not registration.is_async:
            return self.get(name)

        instance = await registration.factory(self)
        # Another caller may have finished first while we awaited
        instance = self._instances.setdefault(name, instance)
        logger.debug(f"Created async service: {name}")
        return instance

    def peek(self, name: str) -> Optional[Any]:
        """Return the service if it has been created, without creating it."""
        return self._instances.get(name)

    def _lookup(self, name: str) -> _Registration:
        try:
            return self._registrations[name]
        except KeyError:
            raise KeyError(f"Service '{name}' is not registered") from None
