"""Tests for engine creation and session handling."""

import pytest
from sqlalchemy import select

from ttsbot.core.database import create_engine, create_session_factory, init_schema, session_scope
from ttsbot.models import UserOptions


async def test_creates_sqlite_parent_directory(tmp_path):
    db_path = tmp_path / "nested" / "data" / "ttsbot.db"

    engine = create_engine(f"sqlite+aiosqlite:///{db_path}")
    try:
        assert db_path.parent.is_dir()
        await init_schema(engine)
        assert db_path.exists()
    finally:
        await engine.dispose()


async def test_session_scope_rolls_back_on_error():
    engine = create_engine("sqlite+aiosqlite:///:memory:")
    await init_schema(engine)
    factory = create_session_factory(engine)
    try:
        with pytest.raises(RuntimeError):
            async with session_scope(factory) as session:
                session.add(UserOptions(user_id=1, options="{}"))
                await session.flush()
                raise RuntimeError("boom")

        async with session_scope(factory) as session:
            rows = (await session.execute(select(UserOptions))).scalars().all()
        assert rows == []
    finally:
        await engine.dispose()
