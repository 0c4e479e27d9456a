"""Tests for the SQLAlchemy option repository.

Uses an in-memory SQLite database to verify the repository implements the
domain protocol and upserts rows.
"""

import pytest
from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ttsbot.domain.errors import OptionDecodeError, StorageConnectionError, StorageWriteError
from ttsbot.domain.repositories import OptionRepository
from ttsbot.infrastructure.repositories import SqlAlchemyOptionRepository
from ttsbot.models import (
    Preset,
    UserOptions,
    VoiceVoxOptionsBuilder,
    VoiceVoxSpeaker,
    dump_options,
)
from ttsbot.models.base import Base

USER = 2**63 - 1  # largest Discord snowflake that fits a signed BIGINT


@pytest.fixture
async def async_engine():
    """Create an in-memory async SQLite engine with all tables."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine):
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def repo(session_factory):
    return SqlAlchemyOptionRepository(session_factory)


async def _rows(session_factory):
    async with session_factory() as session:
        result = await session.execute(select(UserOptions))
        return list(result.scalars().all())


async def test_implements_protocol(repo):
    assert isinstance(repo, OptionRepository)


async def test_load_all_empty(repo):
    assert await repo.load_all() == {}


async def test_upsert_inserts_then_replaces(repo, session_factory):
    munou = Preset.MUNOU.to_options()
    zundamon = VoiceVoxOptionsBuilder().speaker(VoiceVoxSpeaker.ZUNDAMON).build()

    await repo.upsert(USER, munou)
    await repo.upsert(USER, zundamon)

    rows = await _rows(session_factory)
    assert len(rows) == 1
    assert rows[0].user_id == USER
    assert rows[0].options == dump_options(zundamon)
    assert await repo.load_all() == {USER: zundamon}


async def test_rows_for_different_users(repo):
    await repo.upsert(1, Preset.TAKUYA.to_options())
    await repo.upsert(2, Preset.MUNOU.to_options())

    loaded = await repo.load_all()
    assert set(loaded) == {1, 2}
    assert loaded[2].pitch == 150


async def test_invalid_row_raises_decode_error(repo, session_factory):
    async with session_factory() as session:
        session.add(UserOptions(user_id=7, options="{not json"))
        await session.commit()

    with pytest.raises(OptionDecodeError) as exc_info:
        await repo.load_all()
    assert exc_info.value.user_id == 7


async def test_load_without_table_raises_connection_error(repo, async_engine):
    async with async_engine.begin() as conn:
        await conn.execute(text("DROP TABLE options"))

    with pytest.raises(StorageConnectionError):
        await repo.load_all()


async def test_upsert_without_table_raises_write_error(repo, async_engine):
    async with async_engine.begin() as conn:
        await conn.execute(text("DROP TABLE options"))

    with pytest.raises(StorageWriteError) as exc_info:
        await repo.upsert(USER, Preset.TAKUYA.to_options())
    assert exc_info.value.user_id == USER
