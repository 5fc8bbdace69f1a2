"""SQLite implementation of TaskRepository."""

from __future__ import annotations

from toado.adapters.sqlite import schema
from toado.adapters.sqlite.base_repository import SqliteRepositoryBase
from toado.adapters.sqlite.utils import MAX_ROW_ID, storage_errors
from toado.errors import NotFoundError
from toado.models import Task, TaskCreate, TaskUpdate
from toado.repositories import TaskRepository


class SqliteTaskRepository(SqliteRepositoryBase[Task], TaskRepository):
    """SQLite implementation of task repository."""

    table = "tasks"
    columns = schema.TASK_COLUMNS
    model = Task
    kind = "Task"

    def _require_project(self, project_id: int) -> None:
        if project_id > MAX_ROW_ID:
            raise NotFoundError("Project", project_id)
        with storage_errors(f"read project {project_id}"):
            row = self.connection.execute(
                "SELECT 1 FROM projects WHERE id = ?", (project_id,)
            ).fetchone()
        if row is None:
            raise NotFoundError("Project", project_id)

    def add(self, task_data: TaskCreate) -> Task:
        """Create a new task. New tasks always start incomplete."""
        data = task_data.model_dump()
        if data["project_id"] is not None:
            self._require_project(data["project_id"])

        data["completed"] = False
        return self._insert(data)

    def update(self, task_id: int, updates: TaskUpdate) -> Task:
        """Update an existing task.

        Only fields explicitly set on ``updates`` are written, so a field set
        to None is cleared while an omitted field is left alone.
        """
        changes = updates.model_dump(exclude_unset=True)
        if changes.get("project_id") is not None:
            self._require_project(changes["project_id"])
        return self._update(task_id, changes)

    def set_completed(self, task_id: int, value: bool) -> Task:
        return self._update(task_id, {"completed": bool(value)})

    def set_project(self, task_id: int, project_id: int | None) -> Task:
        if not self.exists(task_id):
            raise NotFoundError(self.kind, task_id)
        if project_id is not None:
            self._require_project(project_id)
        return self._update(task_id, {"project_id": project_id})
