"""
Pytest fixtures для тестов.

Предоставляет:
- test_engine / test_db: изолированная SQLite in-memory БД для каждого теста
- failing_commit_factory: сессии той же БД, в которых commit падает
- file_engine / session_factory: SQLite-файл для тестов с параллельными сессиями
- test_client: HTTP клиент для тестирования API endpoints
- file_client: HTTP клиент поверх file_engine (параллельные запросы)
"""

import os

# Приложение не должно трогать ./tasks.db во время тестов
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "simple")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.exc import OperationalError  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from taskserver.api.dependencies import get_db  # noqa: E402
from taskserver.core.database import build_engine, drop_db, init_db  # noqa: E402
from taskserver.main import app  # noqa: E402

# Test database URL (SQLite in-memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """
    Async engine для тестовой БД (SQLite in-memory).

    StaticPool - одно и то же соединение для всех сессий,
    иначе in-memory БД теряет данные.
    Таблицы создаются заново для каждого теста.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    await init_db(engine)
    yield engine
    await drop_db(engine)
    await engine.dispose()


@pytest_asyncio.fixture
async def test_db(test_engine):
    """Async session для работы с тестовой БД. Незакоммиченное откатывается."""
    TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()


class FailingCommitSession(AsyncSession):
    """Сессия, у которой commit падает (например, диск переполнен)."""

    async def commit(self) -> None:
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))


@pytest.fixture
def failing_commit_factory(test_engine):
    """Фабрика сессий тестовой БД, в которых commit всегда падает."""
    return async_sessionmaker(test_engine, class_=FailingCommitSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def file_engine(tmp_path):
    """
    Engine на SQLite-файле, собранный так же, как в приложении (build_engine).

    Каждая сессия получает своё соединение, поэтому транзакции
    действительно идут параллельно (как с несколькими клиентами БД).
    """
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'tasks.db'}")

    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(file_engine):
    """Фабрика сессий для file_engine."""
    return async_sessionmaker(file_engine, class_=AsyncSession, expire_on_commit=False)


def session_override(factory: async_sessionmaker[AsyncSession]):
    """Замена get_db с той же логикой транзакции, но на другой фабрике сессий."""

    async def override_get_db():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    return override_get_db


@pytest_asyncio.fixture
async def test_client(test_engine):
    """HTTP клиент для API endpoints, работающий с тестовой БД."""
    TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    app.dependency_overrides[get_db] = session_override(TestSessionLocal)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def file_client(session_factory):
    """HTTP клиент, где каждый запрос получает своё соединение к SQLite-файлу."""
    app.dependency_overrides[get_db] = session_override(session_factory)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
