"""
Dependencies для FastAPI endpoints.

Цепочка зависимостей:
    get_task_repository зависит от get_db
    -> FastAPI вызывает get_db() и получает сессию
    -> передаёт её в get_task_repository()
    -> endpoint получает готовый TaskRepository

В тестах get_db подменяется через app.dependency_overrides.
"""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import AsyncSessionLocal
from ..repositories import TaskRepository


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency для получения сессии БД.

    Одна сессия (и одна транзакция) на один HTTP запрос:
    commit() при успехе, rollback() при ошибке.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_task_repository(db: AsyncSession = Depends(get_db)) -> TaskRepository:
    """Dependency для TaskRepository."""
    return TaskRepository(db)
