"""
API endpoints для работы с задачами (/task/).

Только адаптация HTTP -> репозиторий:
- разбор id из пути и тела запроса (Pydantic)
- вызов TaskRepository
- TaskNotFoundError -> 404, StorageUnavailableError -> 500
  (см. errors.py, роутер их не ловит)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from ..repositories import TaskRepository
from .dependencies import get_task_repository
from .schemas import ErrorResponse, TaskCreate, TaskCreated, TaskResponse

router = APIRouter(prefix="/task", tags=["tasks"])

NOT_FOUND_RESPONSE = {404: {"model": ErrorResponse, "description": "Задача не найдена"}}

# id хранится в INTEGER (64 бита со знаком); больше - ошибка разбора, а не 500
TaskId = Annotated[int, Path(ge=-(2**63), le=2**63 - 1, description="ID задачи")]


# ============================================================================
# CREATE TASK
# ============================================================================


@router.post(
    "/",
    response_model=TaskCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Создать задачу",
    responses={400: {"model": ErrorResponse, "description": "Ошибка валидации"}},
)
async def create_task(
    data: TaskCreate, repo: TaskRepository = Depends(get_task_repository)
) -> TaskCreated:
    """
    Создать новую задачу. id выдаётся сервером.

    Пример запроса:
    ```json
    {"text": "buy milk", "tags": ["errand", "home"], "due": "2024-03-15T10:00:00Z"}
    ```

    Пример ответа:
    ```json
    {"id": 1}
    ```
    """
    task_id = await repo.create_task(text=data.text, tags=data.tags, due=data.due)
    await repo.commit()
    return TaskCreated(id=task_id)


# ============================================================================
# READ
# ============================================================================


@router.get("/", response_model=list[TaskResponse], summary="Получить все задачи")
async def get_all_tasks(
    repo: TaskRepository = Depends(get_task_repository),
) -> list[TaskResponse]:
    tasks = await repo.get_all_tasks()
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Получить задачу по ID",
    responses=NOT_FOUND_RESPONSE,
)
async def get_task(
    task_id: TaskId, repo: TaskRepository = Depends(get_task_repository)
) -> TaskResponse:
    """
    Получить задачу по ID.

    Пример запроса:
    ```
    GET /task/1
    ```
    """
    task = await repo.get_task(task_id)
    return TaskResponse.model_validate(task)


# ============================================================================
# DELETE
# ============================================================================


@router.delete(
    "/",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Удалить все задачи",
)
async def delete_all_tasks(repo: TaskRepository = Depends(get_task_repository)) -> Response:
    await repo.delete_all_tasks()
    await repo.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Удалить задачу",
    responses=NOT_FOUND_RESPONSE,
)
async def delete_task(
    task_id: TaskId, repo: TaskRepository = Depends(get_task_repository)
) -> Response:
    """
    Удалить задачу по ID.

    204 - удалена, 404 - задачи с таким id не было.
    """
    await repo.delete_task(task_id)
    await repo.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
