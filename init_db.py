"""
Скрипт для инициализации базы данных.

Создаёт таблицы tasks и counters напрямую через SQLAlchemy
(приложение делает то же самое при старте).

Запуск:
    DATABASE_URL=postgresql+asyncpg://... python init_db.py
"""

import asyncio

from taskserver.core.config import settings
from taskserver.core.database import engine, init_db


async def main():
    """Создать все таблицы."""
    print(f"Создание таблиц в {engine.url.render_as_string(hide_password=True)}...")
    await init_db()
    await engine.dispose()
    print(f"✓ Таблицы созданы успешно! ({settings.APP_NAME})")


if __name__ == "__main__":
    asyncio.run(main())
