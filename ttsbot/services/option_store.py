"""
Per-user voice options with an in-memory mirror of the database.

Every stored row is loaded once at connect time; afterwards reads are
served from memory and never touch the database. Writes go to the
database first and the cache is only updated after the write committed,
so the cache never shows a value that was not persisted.

Usage:
    store = await OptionStore.connect("sqlite+aiosqlite:///./data/ttsbot.db")
    options = store.get(user_id)
    await store.set(user_id, new_options)
    await store.close()
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from ..core.database import create_engine, create_session_factory, init_schema
from ..domain.errors import StorageConnectionError
from ..domain.repositories import OptionRepository
from ..infrastructure.repositories import SqlAlchemyOptionRepository
from ..models.options import DEFAULT_OPTIONS, Options, engine_of
from ..utils.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)


class OptionStore:
    """Cached, write-through store of each user's TTS options."""

    def __init__(
        self,
        repository: OptionRepository,
        initial: Optional[Dict[int, Options]] = None,
        default: Options = DEFAULT_OPTIONS,
        engine: Optional[AsyncEngine] = None,
    ) -> None:
        self._repository = repository
        self._cache: Dict[int, Options] = dict(initial or {})
        self._default = default
        self._engine = engine
        self._lock = ReadWriteLock()
        # Serialises writes for the same user so the cache ends up matching
        # whichever write reached the database last. An entry lives only while
        # a write for that user is running or waiting.
        self._user_locks: Dict[int, asyncio.Lock] = {}
        self._user_lock_holders: Dict[int, int] = {}

    # -- Factory --

    @classmethod
    async def connect(cls, database_url: str) -> "OptionStore":
        """Open the database, create the table if needed and load all rows.

        Raises:
            StorageConnectionError: The database is unreachable.
            OptionDecodeError: A stored row is not valid options.
        """
        try:
            engine = create_engine(database_url)
        except (SQLAlchemyError, OSError) as e:
            raise StorageConnectionError(f"Could not open database: {e}") from e
        try:
            try:
                await init_schema(engine)
            except (SQLAlchemyError, OSError) as e:
                raise StorageConnectionError(f"Could not open database: {e}") from e
            repository = SqlAlchemyOptionRepository(create_session_factory(engine))
            initial = await repository.load_all()
        except BaseException:
            await engine.dispose()
            raise
        logger.info(f"Option store ready with {len(initial)} cached users")
        return cls(repository, initial=initial, engine=engine)

    @classmethod
    async def from_repository(cls, repository: OptionRepository) -> "OptionStore":
        """Build a store over an existing repository, loading all rows."""
        return cls(repository, initial=await repository.load_all())

    # -- Reads --

    @property
    def default(self) -> Options:
        return self._default

    def get(self, user_id: int) -> Options:
        """Return the user's options, or the default when none are stored."""
        with self._lock.read():
            return self._cache.get(user_id, self._default)

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._cache)

    @property
    def cached_user_count(self) -> int:
        return len(self)

    # -- Writes --

    async def set(self, user_id: int, options: Options) -> None:
        """Persist ``options`` for ``user_id``, then update the cache.

        Raises:
            StorageWriteError: The database write failed; the cache keeps
                its previous value.
        """
        engine_of(options)
        async with self._locked_for(user_id):
            await self._repository.upsert(user_id, options)
            # No await between the completed write and the cache update, so
            # a cancelled write never reaches this line.
            with self._lock.write():
                self._cache[user_id] = options
        logger.info(f"Stored {engine_of(options)} options for user {user_id}")

    @asynccontextmanager
    async def _locked_for(self, user_id: int) -> AsyncIterator[None]:
        lock = self._user_locks.get(user_id)
        if lock is None:
            lock = self._user_locks[user_id] = asyncio.Lock()
        self._user_lock_holders[user_id] = self._user_lock_holders.get(user_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            remaining = self._user_lock_holders.pop(user_id) - 1
            if remaining:
                self._user_lock_holders[user_id] = remaining
            else:
                del self._user_locks[user_id]

    # -- Lifecycle --

    async def close(self) -> None:
        """Dispose the database engine if this store owns one."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            logger.info("Option store closed")
