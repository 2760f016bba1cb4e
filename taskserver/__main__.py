"""
Запуск сервера: python -m taskserver

Хост и порт берутся из SERVER_HOST / SERVER_PORT (по умолчанию 0.0.0.0:8080).
"""

import uvicorn

from .core.config import settings


def main() -> None:
    uvicorn.run(
        "taskserver.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        log_config=None,  # логирование настраивает taskserver.core.logging
    )


if __name__ == "__main__":
    main()
