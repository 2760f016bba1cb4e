"""
Обработчики ошибок (Exception Handlers) для API.

Все ошибки возвращаются в едином формате ErrorResponse:
- ошибки валидации запроса          -> 400 VALIDATION_ERROR
- TaskNotFoundError (репозиторий)   -> 404 NOT_FOUND
- StorageUnavailableError           -> 500 STORAGE_UNAVAILABLE
- всё остальное                     -> 500 INTERNAL_ERROR

Внутренние детали (stack trace, текст ошибки БД) клиенту не отдаются,
они только пишутся в лог.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..repositories import StorageUnavailableError, TaskNotFoundError
from .schemas import ErrorBody, ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


# =============================================================================
# CUSTOM EXCEPTIONS
# =============================================================================


class APIError(Exception):
    """
    Базовый класс для ошибок уровня API.

    Использование:
        raise APIError(code="VALIDATION_ERROR", message="...", status_code=400)
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: list[dict] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class ValidationError_(APIError):
    """
    Ошибка валидации, которую не поймал Pydantic (400).

    Использование:
        raise ValidationError_("Invalid date", details=[{"field": "day", "message": "..."}])
    """

    def __init__(self, message: str, details: list[dict] | None = None):
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


def _error_response(
    status_code: int, code: str, message: str, details: list[ErrorDetail] | None = None
) -> JSONResponse:
    body = ErrorResponse(error=ErrorBody(code=code, message=message, details=details))
    return JSONResponse(status_code=status_code, content=body.model_dump())


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Преобразует APIError в ErrorResponse."""
    logger.warning(f"API Error: {exc.code} - {exc.message}")

    details = None
    if exc.details:
        details = [ErrorDetail(field=d["field"], message=d["message"]) for d in exc.details]

    return _error_response(exc.status_code, exc.code, exc.message, details)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Ошибки валидации Pydantic -> 400.

    Pydantic возвращает ошибки в своём формате:
        {"type": "int_parsing", "loc": ["query", "year"], "msg": "..."}

    Мы преобразуем это в:
        {"field": "year", "message": "..."}
    """
    logger.warning(f"Validation Error: {exc.errors()}")

    details = []
    for error in exc.errors():
        # loc - путь к полю: ["body", "due"], ["query", "year"], ["path", "task_id"]
        field_path = error.get("loc", [])
        if len(field_path) > 1:
            field_name = ".".join(str(p) for p in field_path[1:])
        else:
            field_name = str(field_path[-1]) if field_path else "unknown"

        details.append(ErrorDetail(field=field_name, message=error.get("msg", "Invalid value")))

    return _error_response(
        status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", "Invalid request", details
    )


async def task_not_found_handler(request: Request, exc: TaskNotFoundError) -> JSONResponse:
    """TaskNotFoundError -> 404 с id в сообщении."""
    logger.warning(f"Not Found: {exc}")
    return _error_response(status.HTTP_404_NOT_FOUND, "NOT_FOUND", str(exc))


async def storage_error_handler(request: Request, exc: StorageUnavailableError) -> JSONResponse:
    """
    Хранилище недоступно -> 500.

    Причину (exc.__cause__) пишем в лог, клиенту - общее сообщение.
    """
    logger.error(f"Storage Error: {exc}", exc_info=exc)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "STORAGE_UNAVAILABLE", "Storage is unavailable"
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Все остальные ошибки (500). Детали НЕ показываем клиенту."""
    logger.error(f"Internal Error: {type(exc).__name__}: {exc}", exc_info=exc)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", "Internal server error"
    )


# =============================================================================
# РЕГИСТРАЦИЯ HANDLERS
# =============================================================================


def register_error_handlers(app: FastAPI) -> None:
    """
    Регистрирует все error handlers в приложении FastAPI.

    Вызывается из main.py:
        register_error_handlers(app)
    """
    app.add_exception_handler(APIError, api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(TaskNotFoundError, task_not_found_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StorageUnavailableError, storage_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_error_handler)

    logger.info("Error handlers registered")
