"""Task model."""

from datetime import datetime

from sqlalchemy import JSON, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, UTCDateTime

# JSON в SQLite, JSONB в PostgreSQL (нужен для оператора @>)
TagList = JSON().with_variant(JSONB(), "postgresql")


class Task(Base):
    """
    Задача - единственная хранимая сущность.

    Одна строка = один самодостаточный документ:
    теги хранятся JSON-массивом прямо в строке задачи.

    id не генерируется базой: его выдаёт счётчик (см. Counter).
    """

    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[list[str]] = mapped_column(TagList, nullable=False, default=list)
    due: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, text='{self.text}', due={self.due.isoformat()})>"
