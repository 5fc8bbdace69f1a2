"""Storage interfaces for tasks and projects.

The service layer only sees these ABCs; ``toado.adapters.sqlite`` provides
the implementations. Every lookup by id raises ``NotFoundError`` when the
row is missing.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from toado.models import (
    ListFilters,
    Project,
    ProjectCreate,
    ProjectUpdate,
    Task,
    TaskCreate,
    TaskUpdate,
)


class TaskRepository(ABC):
    """Task persistence."""

    @abstractmethod
    def list_all(self, filters: ListFilters) -> list[Task]:
        """Tasks matching ``filters.search``, ordered and paged as requested."""

    @abstractmethod
    def count(self, search: str | None = None) -> int:
        """Number of tasks whose name contains ``search`` (all when None)."""

    @abstractmethod
    def get(self, task_id: int) -> Task: ...

    @abstractmethod
    def add(self, task_data: TaskCreate) -> Task:
        """Insert a task and return it with its new id.

        A ``project_id`` that names no project raises ``NotFoundError``.
        """

    @abstractmethod
    def update(self, task_id: int, updates: TaskUpdate) -> Task:
        """Write only the fields set on ``updates``."""

    @abstractmethod
    def delete(self, task_id: int) -> None: ...

    @abstractmethod
    def set_completed(self, task_id: int, value: bool) -> Task: ...

    @abstractmethod
    def set_project(self, task_id: int, project_id: int | None) -> Task:
        """Point a task at a project, or detach it with None."""


class ProjectRepository(ABC):
    """Project persistence."""

    @abstractmethod
    def list_all(self, filters: ListFilters) -> list[Project]: ...

    @abstractmethod
    def count(self, search: str | None = None) -> int: ...

    @abstractmethod
    def get(self, project_id: int) -> Project: ...

    @abstractmethod
    def create(self, project_data: ProjectCreate) -> Project: ...

    @abstractmethod
    def update(self, project_id: int, updates: ProjectUpdate) -> Project: ...

    @abstractmethod
    def delete(self, project_id: int) -> None:
        """Remove a project. Its tasks stay, with ``project_id`` cleared."""
