"""Storage service - CRUD and query operations over tasks and projects.

This service layer sits between commands and repositories. Every operation
takes an EntityKind and routes to the matching repository, converting loose
field dictionaries into validated models on the way in.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from toado.errors import ValidationError
from toado.models import (
    EntityKind,
    ListFilters,
    OrderBy,
    OrderDir,
    Project,
    ProjectCreate,
    ProjectUpdate,
    Task,
    TaskCreate,
    TaskUpdate,
    describe_errors,
)
from toado.repositories import ProjectRepository, TaskRepository

Record = Task | Project


def _validate(model: type[BaseModel], fields: dict[str, Any]) -> Any:
    """Build ``model`` from ``fields``, raising toado's ValidationError."""
    try:
        return model.model_validate(fields)
    except PydanticValidationError as e:
        raise ValidationError(
            f"Invalid {model.__name__} fields: {describe_errors(e)}"
        ) from e


class StorageService:
    """Service for task and project persistence.

    All mutations are committed before the method returns.
    """

    def __init__(
        self, task_repository: TaskRepository, project_repository: ProjectRepository
    ):
        """Initialize the storage service.

        Args:
            task_repository: TaskRepository implementation for task data
            project_repository: ProjectRepository implementation for project data
        """
        self.tasks = task_repository
        self.projects = project_repository

    def _repository(self, kind: EntityKind) -> TaskRepository | ProjectRepository:
        return self.tasks if kind is EntityKind.TASK else self.projects

    def create(self, kind: EntityKind, fields: dict[str, Any]) -> int:
        """Insert a new record and return its id.

        Raises:
            ValidationError: If name is missing or empty, or a field is invalid
            NotFoundError: If a task's project_id names a missing project
        """
        if kind is EntityKind.TASK:
            return self.tasks.add(_validate(TaskCreate, fields)).id
        return self.projects.create(_validate(ProjectCreate, fields)).id

    def get(self, kind: EntityKind, entity_id: int) -> Record:
        """Get a record by id.

        Raises:
            NotFoundError: If the id does not exist
        """
        return self._repository(kind).get(entity_id)

    def update(self, kind: EntityKind, entity_id: int, changes: dict[str, Any]) -> None:
        """Apply a partial update. Keys mapped to None clear optional fields.

        Raises:
            NotFoundError: If the id does not exist
            ValidationError: If a changed value is invalid
        """
        if kind is EntityKind.TASK:
            self.tasks.update(entity_id, _validate(TaskUpdate, changes))
        else:
            self.projects.update(entity_id, _validate(ProjectUpdate, changes))

    def delete(self, kind: EntityKind, entity_id: int) -> None:
        """Delete a record. Deleting a project unassigns its tasks.

        Raises:
            NotFoundError: If the id does not exist
        """
        self._repository(kind).delete(entity_id)

    def list(
        self,
        kind: EntityKind,
        filter: str | None = None,
        order_by: OrderBy | None = None,
        direction: OrderDir | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Record]:
        """List records, filtered by name, ordered, then paginated.

        Args:
            kind: Entity kind to list
            filter: Case-insensitive substring of the name
            order_by: Sort column (default id)
            direction: Sort direction (default ascending)
            limit: Maximum number of records
            offset: Number of ordered records to skip

        Raises:
            ValidationError: If limit or offset is negative
        """
        filters = _validate(
            ListFilters,
            {
                "search": filter,
                "order_by": order_by or OrderBy.ID,
                "direction": direction or OrderDir.ASC,
                "limit": limit,
                "offset": offset,
            },
        )
        return self._repository(kind).list_all(filters)

    def count(self, kind: EntityKind, filter: str | None = None) -> int:
        """Count records whose name matches the filter (all when None)."""
        return self._repository(kind).count(filter)

    def set_completed(self, task_id: int, value: bool) -> None:
        """Set a task's completion flag. Setting the current value is a no-op."""
        self.tasks.set_completed(task_id, value)

    def assign(self, task_id: int, project_id: int) -> None:
        """Assign a task to a project.

        Raises:
            NotFoundError: If the task or the project does not exist
        """
        self.tasks.set_project(task_id, project_id)

    def unassign(self, task_id: int) -> None:
        """Remove a task from its project.

        Raises:
            NotFoundError: If the task does not exist
        """
        self.tasks.set_project(task_id, None)
