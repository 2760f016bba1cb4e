"""API endpoint для поиска задач по тегу (/tag/)."""

from fastapi import APIRouter, Depends, Query

from ..repositories import TaskRepository
from .dependencies import get_task_repository
from .schemas import ErrorResponse, TaskResponse

router = APIRouter(prefix="/tag", tags=["tags"])


@router.get(
    "/",
    response_model=list[TaskResponse],
    summary="Получить задачи по тегу",
    responses={400: {"model": ErrorResponse, "description": "Не указан tag"}},
)
async def get_tasks_by_tag(
    tag: str = Query(..., min_length=1, description="Тег (точное совпадение)"),
    repo: TaskRepository = Depends(get_task_repository),
) -> list[TaskResponse]:
    """
    Получить задачи, у которых есть указанный тег.

    Сравнение точное и регистрозависимое: "Home" != "home".
    Если таких задач нет - пустой список.

    Пример запроса:
    ```
    GET /tag/?tag=home
    ```
    """
    tasks = await repo.get_tasks_by_tag(tag)
    return [TaskResponse.model_validate(t) for t in tasks]
