"""
Pydantic схемы для API.

DTOs (Data Transfer Objects) - объекты для передачи данных через HTTP.
Модель SQLAlchemy (Task) наружу не отдаётся: клиент видит только
поля, описанные здесь.
"""

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

# ============================================================================
# TASK SCHEMAS
# ============================================================================


class TaskCreate(BaseModel):
    """
    Схема для создания задачи (POST /task/).

    due - ISO-8601 с указанием часового пояса (Z или +03:00).
    Время без часового пояса отклоняется.

    Пример запроса:
    {
        "text": "buy milk",
        "tags": ["errand", "home"],
        "due": "2024-03-15T10:00:00Z"
    }
    """

    text: str = Field(..., description="Текст задачи")
    tags: list[str] = Field(default_factory=list, description="Теги (порядок не важен)")
    due: AwareDatetime = Field(..., description="Дедлайн, ISO-8601 с часовым поясом")


class TaskCreated(BaseModel):
    """Ответ на создание задачи: {"id": 1}."""

    id: int


class TaskResponse(BaseModel):
    """
    Задача в ответе API.

    Пример ответа:
    {
        "id": 1,
        "text": "buy milk",
        "tags": ["errand", "home"],
        "due": "2024-03-15T10:00:00Z"
    }
    """

    id: int
    text: str
    tags: list[str]
    due: AwareDatetime

    model_config = ConfigDict(from_attributes=True)


# ============================================================================
# ERROR SCHEMAS
# ============================================================================


class ErrorDetail(BaseModel):
    """Ошибка конкретного поля."""

    field: str
    message: str


class ErrorBody(BaseModel):
    """Тело ошибки."""

    code: str = Field(..., description="Машиночитаемый код: NOT_FOUND, VALIDATION_ERROR, ...")
    message: str = Field(..., description="Сообщение для человека")
    details: list[ErrorDetail] | None = None


class ErrorResponse(BaseModel):
    """
    Единый формат ошибок API.

    Пример:
    {
        "error": {
            "code": "NOT_FOUND",
            "message": "Task with id=42 not found",
            "details": null
        }
    }
    """

    error: ErrorBody
