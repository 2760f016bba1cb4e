"""SQLAlchemy models for the task server."""

from .base import Base, UTCDateTime
from .counter import TASK_ID_COUNTER, Counter
from .task import Task

__all__ = [
    "Base",
    "UTCDateTime",
    "Counter",
    "TASK_ID_COUNTER",
    "Task",
]
