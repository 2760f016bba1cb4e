"""API endpoint для поиска задач по дню дедлайна (/due/)."""

from fastapi import APIRouter, Depends, Query

from ..repositories import TaskRepository
from .dependencies import get_task_repository
from .errors import ValidationError_
from .schemas import ErrorResponse, TaskResponse

router = APIRouter(prefix="/due", tags=["due"])


@router.get(
    "/",
    response_model=list[TaskResponse],
    summary="Получить задачи по дню дедлайна",
    responses={400: {"model": ErrorResponse, "description": "Некорректная дата"}},
)
async def get_tasks_by_due_date(
    year: int = Query(..., ge=1, le=9999, description="Год"),
    month: int = Query(..., ge=1, le=12, description="Месяц (1-12)"),
    day: int = Query(..., ge=1, le=31, description="День месяца"),
    repo: TaskRepository = Depends(get_task_repository),
) -> list[TaskResponse]:
    """
    Получить задачи с дедлайном в указанный день (по UTC).

    Пример запроса:
    ```
    GET /due/?year=2024&month=3&day=15
    ```
    вернёт задачи с 2024-03-15T00:00:00Z включительно
    до 2024-03-16T00:00:00Z не включительно.
    """
    try:
        tasks = await repo.get_tasks_by_due_date(year, month, day)
    except (ValueError, OverflowError) as e:
        # Например, 2024-02-30 или 9999-12-31 (следующая полночь не существует)
        raise ValidationError_(
            f"Invalid date: {year:04d}-{month:02d}-{day:02d}",
            details=[{"field": "day", "message": str(e)}],
        ) from e
    return [TaskResponse.model_validate(t) for t in tasks]
