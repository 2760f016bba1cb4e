"""Base classes and column types for SQLAlchemy models."""

from datetime import UTC, datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware datetime, хранящийся как naive UTC.

    SQLite не хранит смещение часового пояса, поэтому перед записью
    любое aware-значение приводится к UTC, а при чтении UTC
    присваивается обратно. Naive значения считаются уже UTC.

    Тот же тип используется и для параметров в WHERE, так что
    сравнение `Task.due >= start` работает с aware datetime.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is not None:
            value = value.astimezone(UTC).replace(tzinfo=None)
        return value

    def process_result_value(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
