"""Counter repository: atomic sequence values for ids."""

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Counter
from .base import BaseRepository
from .errors import RepositoryError

# Диалекты с поддержкой INSERT ... ON CONFLICT DO UPDATE ... RETURNING
_UPSERT_INSERTS = {
    "sqlite": sqlite_insert,
    "postgresql": pg_insert,
}


class CounterRepository(BaseRepository[Counter]):
    """
    Репозиторий счётчиков последовательностей.

    Выдача следующего значения - ОДИН SQL-оператор:

        INSERT INTO counters (id, seq) VALUES (:name, 1)
        ON CONFLICT (id) DO UPDATE SET seq = counters.seq + 1
        RETURNING seq;

    Инкремент и чтение происходят атомарно внутри СУБД, поэтому
    параллельные вызовы никогда не получат одно и то же значение.
    Если строки счётчика ещё нет, тот же оператор её создаёт (seq=1).
    Никаких блокировок в процессе и никаких "прочитать, потом записать".
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Counter, db)

    async def next_value(self, name: str) -> int:
        """
        Атомарно увеличить счётчик `name` и вернуть новое значение.

        Raises:
            StorageUnavailableError: хранилище недоступно
            RepositoryError: диалект не поддерживает upsert
        """
        insert = _UPSERT_INSERTS.get(self.dialect_name)
        if insert is None:
            raise RepositoryError(f"Atomic counters are not supported for '{self.dialect_name}'")

        statement = (
            insert(Counter)
            .values(id=name, seq=1)
            .on_conflict_do_update(
                index_elements=[Counter.id],
                set_={"seq": Counter.seq + 1},
            )
            .returning(Counter.seq)
        )
        result = await self._execute(statement)
        return result.scalar_one()

    async def current_value(self, name: str) -> int:
        """Последнее выданное значение счётчика (0, если счётчик не создан)."""
        result = await self._execute(select(Counter.seq).where(Counter.id == name))
        return result.scalar_one_or_none() or 0
