"""Counter model."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base

# Пространство имён счётчика для id задач
TASK_ID_COUNTER = "taskid"


class Counter(Base):
    """
    Счётчик последовательности для выдачи id.

    Одна строка на пространство имён: id="taskid", seq=<последний выданный id>.
    Строка создаётся при первом инкременте, отдельная инициализация не нужна.
    """

    __tablename__ = "counters"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    seq: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Counter(id='{self.id}', seq={self.seq})>"
