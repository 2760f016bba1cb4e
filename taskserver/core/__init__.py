"""Core application components."""

from .config import Settings, settings
from .database import AsyncSessionLocal, build_engine, drop_db, engine, init_db

__all__ = [
    "settings",
    "Settings",
    "engine",
    "build_engine",
    "AsyncSessionLocal",
    "init_db",
    "drop_db",
]
