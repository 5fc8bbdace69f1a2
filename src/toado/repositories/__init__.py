"""Repository interfaces for Toado.

This package contains abstract base classes (ABCs) that define the contracts
for data persistence operations. The SQLite implementations live in
``toado.adapters.sqlite``.
"""

from .repository import ProjectRepository, TaskRepository

__all__ = [
    "TaskRepository",
    "ProjectRepository",
]
