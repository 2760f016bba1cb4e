"""
Главный файл FastAPI приложения.

Точка входа в Task Server.

Запуск:
    python -m taskserver
    uvicorn taskserver.main:app --reload

API документация:
    http://localhost:8080/docs       - Swagger UI
    http://localhost:8080/redoc      - ReDoc
"""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from . import __version__
from .api import due_router, tags_router, tasks_router
from .api.dependencies import get_task_repository
from .api.errors import register_error_handlers
from .api.middleware import RequestLoggingMiddleware
from .core.config import settings
from .core.database import init_db
from .core.logging import get_logger, setup_logging
from .repositories import StorageUnavailableError, TaskRepository

# Инициализируем логирование при импорте модуля
setup_logging(
    log_level=settings.LOG_LEVEL,
    log_format=settings.LOG_FORMAT,
    sql_echo=settings.DATABASE_ECHO,
    service=settings.APP_NAME,
)

logger = get_logger(__name__)

APP_START_TIME: float = 0.0  # Will be set on startup

# ============================================================================
# RATE LIMITER SETUP
# ============================================================================

# Запросы группируются по IP адресу клиента
limiter = Limiter(key_func=get_remote_address)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Превышение лимита запросов -> 429 в едином формате ErrorResponse."""
    return JSONResponse(
        status_code=429,
        content={
            "error": {
                "code": "RATE_LIMIT_EXCEEDED",
                "message": f"Too many requests. Limit: {exc.detail}",
                "details": [{"field": "rate_limit", "message": str(exc.detail)}],
            }
        },
    )


# ============================================================================
# LIFESPAN EVENT HANDLER
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: создание таблиц (если их ещё нет).
    Shutdown: запись uptime в лог.
    """
    global APP_START_TIME

    APP_START_TIME = time.time()
    await init_db()

    logger.info(
        "Application started",
        extra={
            "app_name": settings.APP_NAME,
            "version": __version__,
            "debug": settings.DEBUG,
            "log_level": settings.LOG_LEVEL,
        },
    )

    yield

    uptime = int(time.time() - APP_START_TIME)
    logger.info("Application stopped", extra={"uptime_seconds": uptime})


# ============================================================================
# CREATE APPLICATION
# ============================================================================

app = FastAPI(
    lifespan=lifespan,
    title=settings.APP_NAME,
    description="""
    Сервис задач: текст, теги и дедлайн.

    ## Endpoints

    * `POST /task/`, `GET /task/`, `DELETE /task/` - создать / получить все / удалить все
    * `GET /task/{id}`, `DELETE /task/{id}` - получить / удалить одну задачу
    * `GET /tag/?tag=home` - задачи с тегом
    * `GET /due/?year=2024&month=3&day=15` - задачи с дедлайном в этот день (UTC)

    ## Архитектура

    ```
    API Layer (FastAPI) → Repository Layer (SQLAlchemy) → Database
    ```

    id задач выдаёт атомарный счётчик в БД, а не autoincrement.
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.state.limiter = limiter
# slowapi handler имеет специфичный тип, но работает корректно
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Каждый запрос логируется с методом, путём, статусом и временем
app.add_middleware(RequestLoggingMiddleware)

app.include_router(tasks_router)
app.include_router(tags_router)
app.include_router(due_router)

register_error_handlers(app)


# ============================================================================
# ROOT ENDPOINT
# ============================================================================


@app.get("/", tags=["root"], summary="Root endpoint", description="Информация о API")
@limiter.limit(settings.RATE_LIMIT)
async def root(request: Request):
    return {
        "name": settings.APP_NAME,
        "version": __version__,
        "docs": "/docs",
        "redoc": "/redoc",
        "openapi": "/openapi.json",
        "endpoints": {
            "tasks": "/task/",
            "task": "/task/{id}",
            "by_tag": "/tag/?tag={tag}",
            "by_due_date": "/due/?year={year}&month={month}&day={day}",
        },
        "rate_limit": settings.RATE_LIMIT,
    }


# ============================================================================
# HEALTH CHECK
# ============================================================================


@app.get(
    "/health", tags=["health"], summary="Health check", description="Проверка работоспособности API"
)
@limiter.limit(settings.RATE_LIMIT)
async def health_check(request: Request, repo: TaskRepository = Depends(get_task_repository)):
    """
    Health check endpoint.

    Проверяет подключение к базе данных: считает задачи (SELECT COUNT(*)).

    Пример ответа (200 OK):
    ```json
    {
        "status": "ok",
        "checks": {
            "database": "connected",
            "tasks": 42,
            "version": "1.0.0",
            "uptime_seconds": 3600
        },
        "timestamp": "2024-03-15T12:00:00+00:00"
    }
    ```

    Если БД недоступна - 503, "status": "error" и "tasks": null.
    """
    uptime_seconds = int(time.time() - APP_START_TIME) if APP_START_TIME > 0 else 0

    task_count: int | None = None
    try:
        task_count = await repo.count()
    except (StorageUnavailableError, OSError) as e:
        logger.warning("Health check failed", extra={"error": str(e)})

    healthy = task_count is not None
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "ok" if healthy else "error",
            "checks": {
                "database": "connected" if healthy else "disconnected",
                "tasks": task_count,
                "version": __version__,
                "uptime_seconds": uptime_seconds,
            },
            "timestamp": datetime.now(UTC).isoformat(),
        },
    )
