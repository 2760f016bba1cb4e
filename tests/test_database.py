"""Тесты для выбора пула соединений в build_engine."""

import pytest
from sqlalchemy.pool import NullPool, StaticPool

from taskserver.core.database import build_engine


@pytest.mark.asyncio
async def test_sqlite_memory_uses_single_connection():
    """Test: in-memory SQLite - StaticPool, иначе каждая сессия видит пустую БД."""
    engine = build_engine("sqlite+aiosqlite:///:memory:")

    assert isinstance(engine.pool, StaticPool)
    await engine.dispose()


@pytest.mark.asyncio
async def test_sqlite_file_uses_connection_per_session(tmp_path):
    """Test: SQLite-файл - NullPool, у каждого запроса своя транзакция."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'tasks.db'}", sqlite_timeout=5.0)

    assert isinstance(engine.pool, NullPool)
    await engine.dispose()


@pytest.mark.asyncio
async def test_sqlite_file_sessions_do_not_share_connection(session_factory):
    """Test: две сессии на файле - два разных DBAPI соединения."""
    async with session_factory() as first, session_factory() as second:
        first_conn = await first.connection()
        second_conn = await second.connection()

        first_raw = await first_conn.get_raw_connection()
        second_raw = await second_conn.get_raw_connection()

        assert first_raw.driver_connection is not second_raw.driver_connection
