"""SQLAlchemy implementation of OptionRepository."""

import logging
from typing import Dict

from sqlalchemy import func, select
from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError

from ttsbot.core.database import SessionFactory, session_scope
from ttsbot.domain.errors import (
    OptionDecodeError,
    StorageConnectionError,
    StorageWriteError,
)
from ttsbot.models.options import Options, dump_options, load_options
from ttsbot.models.user_options import UserOptions

logger = logging.getLogger(__name__)

_ON_CONFLICT_INSERTS = {
    "sqlite": sqlite_insert,
    "postgresql": postgresql_insert,
}


class SqlAlchemyOptionRepository:
    """Concrete OptionRepository backed by SQLAlchemy async sessions."""

    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    async def load_all(self) -> Dict[int, Options]:
        """Load and decode every stored row."""
        try:
            async with session_scope(self._session_factory) as session:
                result = await session.execute(select(UserOptions))
                rows = list(result.scalars().all())
        except (SQLAlchemyError, OSError) as e:
            raise StorageConnectionError(f"Could not load options: {e}") from e

        loaded: Dict[int, Options] = {}
        for row in rows:
            try:
                loaded[row.user_id] = load_options(row.options)
            except ValueError as e:
                raise OptionDecodeError(row.user_id, str(e)) from e
        logger.info(f"Loaded stored options for {len(loaded)} users")
        return loaded

    async def upsert(self, user_id: int, options: Options) -> None:
        """Insert or replace the row for ``user_id`` and commit."""
        encoded = dump_options(options)
        try:
            async with session_scope(self._session_factory) as session:
                dialect = session.get_bind().dialect.name
                if dialect in _ON_CONFLICT_INSERTS:
                    stmt = _ON_CONFLICT_INSERTS[dialect](UserOptions).values(
                        user_id=user_id, options=encoded
                    )
                    stmt = stmt.on_conflict_do_update(
                        index_elements=[UserOptions.user_id],
                        set_={"options": stmt.excluded.options, "updated_at": func.now()},
                    )
                    await session.execute(stmt)
                elif dialect in ("mysql", "mariadb"):
                    stmt = mysql_insert(UserOptions).values(
                        user_id=user_id, options=encoded
                    )
                    stmt = stmt.on_duplicate_key_update(
                        options=stmt.inserted.options, updated_at=func.now()
                    )
                    await session.execute(stmt)
                else:
                    await session.merge(UserOptions(user_id=user_id, options=encoded))
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise StorageWriteError(user_id, str(e)) from e
        logger.debug(f"Upserted options for user {user_id}")
