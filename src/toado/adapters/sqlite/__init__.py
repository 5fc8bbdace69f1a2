"""SQLite adapter module - Local database storage implementation."""

from toado.adapters.sqlite.connection import DatabaseConnection
from toado.adapters.sqlite.project_repository import SqliteProjectRepository
from toado.adapters.sqlite.task_repository import SqliteTaskRepository

__all__ = [
    "DatabaseConnection",
    "SqliteTaskRepository",
    "SqliteProjectRepository",
]
