"""Repository-level exceptions."""


class RepositoryError(Exception):
    """Base class for repository errors."""


class TaskNotFoundError(RepositoryError):
    """
    Задача с запрошенным id не существует.

    Ожидаемая ошибка: API превращает её в 404.
    """

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task with id={task_id} not found")


class StorageUnavailableError(RepositoryError):
    """
    Хранилище недоступно или запрос упал по инфраструктурной причине.

    Исходное исключение SQLAlchemy доступно через __cause__.
    Репозиторий не повторяет запрос и не логирует ошибку.
    """
