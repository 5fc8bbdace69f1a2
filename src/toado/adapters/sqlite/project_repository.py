"""SQLite implementation of ProjectRepository."""

from __future__ import annotations

from toado.adapters.sqlite import schema
from toado.adapters.sqlite.base_repository import SqliteRepositoryBase
from toado.adapters.sqlite.utils import storage_errors
from toado.errors import NotFoundError
from toado.models import Project, ProjectCreate, ProjectUpdate
from toado.repositories import ProjectRepository
from toado.utils.logger import get_logger


class SqliteProjectRepository(SqliteRepositoryBase[Project], ProjectRepository):
    """SQLite implementation of project repository."""

    table = "projects"
    columns = schema.PROJECT_COLUMNS
    model = Project
    kind = "Project"

    def create(self, project_data: ProjectCreate) -> Project:
        """Create a new project."""
        return self._insert(project_data.model_dump())

    def update(self, project_id: int, updates: ProjectUpdate) -> Project:
        """Update an existing project."""
        return self._update(project_id, updates.model_dump(exclude_unset=True))

    def delete(self, project_id: int) -> None:
        """Delete a project.

        Tasks assigned to the project are kept and become unassigned.
        """
        if not self.exists(project_id):
            raise NotFoundError(self.kind, project_id)

        # One transaction: tasks are only unassigned if the project goes too
        with storage_errors(f"delete project {project_id}"), self.connection:
            cursor = self.connection.execute(
                "UPDATE tasks SET project_id = NULL WHERE project_id = ?",
                (project_id,),
            )
            self.connection.execute("DELETE FROM projects WHERE id = ?", (project_id,))

        get_logger("sqlite").debug(
            "deleted project %s, unassigned %d task(s)", project_id, cursor.rowcount
        )
