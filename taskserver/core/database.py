"""Database connection and session management."""

from sqlalchemy import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, StaticPool

from .config import settings


def build_engine(url: str, echo: bool = False, sqlite_timeout: float = 30.0) -> AsyncEngine:
    """
    Создать async engine для указанного URL.

    SQLite in-memory: StaticPool - одно соединение на всё приложение,
    иначе каждое новое соединение видит свою пустую БД.

    SQLite-файл и остальные СУБД: NullPool - каждая сессия открывает своё
    соединение, поэтому транзакции параллельных запросов не смешиваются
    (rollback одного запроса не откатывает INSERT другого).
    sqlite_timeout - сколько секунд ждать, пока другое соединение
    держит блокировку записи.
    """
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite":
        if parsed.database in (None, "", ":memory:"):
            return create_async_engine(
                url,
                echo=echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        return create_async_engine(
            url,
            echo=echo,
            poolclass=NullPool,
            connect_args={"timeout": sqlite_timeout},
        )
    return create_async_engine(url, echo=echo, poolclass=NullPool)


engine = build_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    sqlite_timeout=settings.SQLITE_BUSY_TIMEOUT,
)

# Create session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def init_db(bind: AsyncEngine | None = None) -> None:
    """Initialize database (create all tables)."""
    from ..models import Base

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db(bind: AsyncEngine | None = None) -> None:
    """Drop all tables (use with caution!)."""
    from ..models import Base

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
