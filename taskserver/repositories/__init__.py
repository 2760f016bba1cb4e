"""Repository layer for data access."""

from .base import BaseRepository
from .counter import CounterRepository
from .errors import RepositoryError, StorageUnavailableError, TaskNotFoundError
from .task import TaskRepository, day_range

__all__ = [
    "BaseRepository",
    "CounterRepository",
    "TaskRepository",
    "day_range",
    "RepositoryError",
    "TaskNotFoundError",
    "StorageUnavailableError",
]
