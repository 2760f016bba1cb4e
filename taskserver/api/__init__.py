"""API layer - FastAPI endpoints."""

from .due import router as due_router
from .tags import router as tags_router
from .tasks import router as tasks_router

__all__ = [
    "tasks_router",
    "tags_router",
    "due_router",
]
