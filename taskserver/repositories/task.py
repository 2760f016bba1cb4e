"""Task repository with specific queries."""

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

from sqlalchemy import ColumnElement, and_, func, literal, select, type_coerce
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import TASK_ID_COUNTER, Task
from .base import BaseRepository
from .counter import CounterRepository
from .errors import TaskNotFoundError


def day_range(year: int, month: int, day: int) -> tuple[datetime, datetime]:
    """
    Календарный день -> полуинтервал [полночь UTC, следующая полночь UTC).

    Raises:
        ValueError: несуществующая дата (например, 2024-02-30)
        OverflowError: следующий день выходит за datetime.max

    Пример:
        day_range(2024, 3, 15)
        # (2024-03-15 00:00:00+00:00, 2024-03-16 00:00:00+00:00)
    """
    start = datetime(year, month, day, tzinfo=UTC)
    return start, start + timedelta(days=1)


class TaskRepository(BaseRepository[Task]):
    """
    Репозиторий задач.

    Владеет таблицей tasks и счётчиком "taskid":
    - выдаёт id через CounterRepository (атомарный инкремент)
    - сохраняет, читает и удаляет задачи
    - фильтрует по тегу и по дню дедлайна

    Ошибка "не найдено" - TaskNotFoundError, любая ошибка хранилища -
    StorageUnavailableError.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Task, db)
        self.counters = CounterRepository(db)

    async def create_task(self, text: str, tags: Sequence[str], due: datetime) -> int:
        """
        Создать задачу и вернуть её id.

        Сначала берётся новый id из счётчика, затем задача сохраняется
        одной строкой. Оба шага идут в транзакции вызывающего кода,
        поэтому при ошибке частично созданной задачи не останется.

        Пример:
            task_id = await repo.create_task(
                "buy milk", ["errand", "home"], datetime(2024, 3, 15, 10, tzinfo=UTC)
            )
        """
        task_id = await self.counters.next_value(TASK_ID_COUNTER)
        await self.create(Task(id=task_id, text=text, tags=list(tags), due=due))
        return task_id

    async def get_all_tasks(self) -> list[Task]:
        """Получить все задачи."""
        return await self.get_all()

    async def get_task(self, task_id: int) -> Task:
        """
        Получить задачу по id.

        Raises:
            TaskNotFoundError: задачи с таким id нет
        """
        task = await self.get_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    async def delete_task(self, task_id: int) -> None:
        """
        Удалить задачу по id.

        Raises:
            TaskNotFoundError: DELETE не затронул ни одной строки
        """
        if not await self.delete(task_id):
            raise TaskNotFoundError(task_id)

    async def delete_all_tasks(self) -> None:
        """Удалить все задачи. Счётчик id не сбрасывается."""
        await self.delete_all()

    async def get_tasks_by_tag(self, tag: str) -> list[Task]:
        """
        Получить задачи, у которых в tags есть строка `tag` (точное совпадение).

        SQL эквивалент (SQLite):
            SELECT * FROM tasks
            WHERE EXISTS (SELECT 1 FROM json_each(tasks.tags) WHERE value = {tag});

        SQL эквивалент (PostgreSQL):
            SELECT * FROM tasks WHERE tags @> '["{tag}"]';
        """
        result = await self._execute(
            select(Task).where(self._has_tag(tag)).order_by(Task.id)
        )
        return list(result.scalars().all())

    async def get_tasks_by_due_date(self, year: int, month: int, day: int) -> list[Task]:
        """
        Получить задачи с дедлайном в указанный календарный день (UTC).

        Условие - диапазон по индексу, без арифметики часовых поясов
        на каждую строку:

            SELECT * FROM tasks WHERE due >= {start} AND due < {start + 24h};

        Raises:
            ValueError: несуществующая дата
        """
        start, end = day_range(year, month, day)
        result = await self._execute(
            select(Task).where(and_(Task.due >= start, Task.due < end)).order_by(Task.id)
        )
        return list(result.scalars().all())

    def _has_tag(self, tag: str) -> ColumnElement[bool]:
        if self.dialect_name == "postgresql":
            return type_coerce(Task.tags, JSONB).contains([tag])

        # json_each разворачивает JSON-массив в строки (колонка value)
        tag_values = func.json_each(Task.tags).table_valued("value")
        return (
            select(literal(1))
            .select_from(tag_values)
            .where(tag_values.c.value == tag)
            .exists()
        )
