"""Base repository with common persistence operations."""

from typing import Any, Generic, TypeVar

from sqlalchemy import Executable, Result, delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.base import Base
from .errors import StorageUnavailableError

# TypeVar для Generic класса - позволяет работать с любой моделью
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Базовый репозиторий с операциями create / read / delete.

    Generic[ModelType] означает, что этот класс работает с любой моделью,
    наследующейся от Base.

    Все обращения к БД идут через _execute()/_flush(): любая ошибка
    SQLAlchemy превращается в StorageUnavailableError. Транзакцией
    управляет вызывающий код (commit/rollback делает get_db()).

    Пример использования:
        repo = BaseRepository[Task](Task, db_session)
        task = await repo.get_by_id(1)
    """

    def __init__(self, model: type[ModelType], db: AsyncSession):
        """
        Args:
            model: Класс модели SQLAlchemy (например, Task)
            db: Асинхронная сессия базы данных
        """
        self.model = model
        self.db = db

    @property
    def dialect_name(self) -> str:
        """Имя диалекта текущего подключения ("sqlite", "postgresql", ...)."""
        return self.db.get_bind().dialect.name

    async def _execute(self, statement: Executable) -> Result[Any]:
        try:
            return await self.db.execute(statement)
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(f"Storage query failed: {type(exc).__name__}") from exc

    async def _flush(self, obj: ModelType | None = None) -> None:
        try:
            await self.db.flush()
            if obj is not None:
                await self.db.refresh(obj)
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(f"Storage write failed: {type(exc).__name__}") from exc

    async def commit(self) -> None:
        """
        Зафиксировать транзакцию сессии.

        Вызывается endpoint'ом ДО формирования ответа: если commit не прошёл,
        клиент получает 500, а не 201/204 для несохранённых данных.
        """
        try:
            await self.db.commit()
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(f"Storage commit failed: {type(exc).__name__}") from exc

    async def create(self, obj: ModelType) -> ModelType:
        """
        Сохранить новую запись.

        flush() отправляет INSERT в БД, но не делает commit.
        refresh() перечитывает строку, чтобы значения прошли
        через типы колонок (например, due возвращается в UTC).
        """
        self.db.add(obj)
        await self._flush(obj)
        return obj

    async def get_by_id(self, id: Any) -> ModelType | None:
        """
        Получить объект по первичному ключу или None.

        SQL эквивалент:
            SELECT * FROM table WHERE id = {id};
        """
        result = await self._execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def get_all(self) -> list[ModelType]:
        """
        Получить все записи, упорядоченные по id.

        SQL эквивалент:
            SELECT * FROM table ORDER BY id;
        """
        result = await self._execute(select(self.model).order_by(self.model.id))
        return list(result.scalars().all())

    async def delete(self, id: Any) -> bool:
        """
        Удалить запись по первичному ключу.

        Returns:
            True если удалено, False если записи не было
        """
        result = await self._execute(delete(self.model).where(self.model.id == id))
        return result.rowcount > 0  # rowcount - количество затронутых строк

    async def delete_all(self) -> int:
        """Удалить все записи. Возвращает количество удалённых строк."""
        result = await self._execute(delete(self.model))
        return result.rowcount

    async def count(self) -> int:
        """
        Подсчитать количество записей.

        SQL эквивалент:
            SELECT COUNT(*) FROM table;
        """
        result = await self._execute(select(func.count()).select_from(self.model))
        return result.scalar_one()
