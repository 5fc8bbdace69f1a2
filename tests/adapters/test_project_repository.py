"""Unit tests for SqliteProjectRepository."""

from __future__ import annotations

import pytest

from toado.errors import NotFoundError, StorageError
from toado.models import ListFilters, OrderBy, ProjectCreate, ProjectUpdate, TaskCreate


class TestProjectRepository:
    def test_create_and_get(self, project_repo):
        project = project_repo.create(
            ProjectCreate(name="Garden", priority=2, start_time="2024-04-01")
        )

        assert project_repo.get(project.id) == project
        assert project.start_time == "2024-04-01"

    def test_update(self, project_repo):
        project = project_repo.create(ProjectCreate(name="Garden", notes="x"))
        updated = project_repo.update(
            project.id, ProjectUpdate(name="Yard", notes=None)
        )

        assert updated.name == "Yard"
        assert updated.notes is None

    def test_list_by_name(self, project_repo):
        for name in ["Work", "Home", "Garden"]:
            project_repo.create(ProjectCreate(name=name))

        projects = project_repo.list_all(ListFilters(order_by=OrderBy.NAME))
        assert [p.name for p in projects] == ["Garden", "Home", "Work"]

    def test_delete_missing(self, project_repo):
        with pytest.raises(NotFoundError, match="Project not found: 3"):
            project_repo.delete(3)

    def test_delete_unassigns_tasks(self, project_repo, task_repo):
        project = project_repo.create(ProjectCreate(name="Home"))
        other = project_repo.create(ProjectCreate(name="Work"))
        kept = task_repo.add(TaskCreate(name="Clean", project_id=project.id))
        untouched = task_repo.add(TaskCreate(name="Report", project_id=other.id))

        project_repo.delete(project.id)

        assert task_repo.get(kept.id).project_id is None
        assert task_repo.get(untouched.id).project_id == other.id
        with pytest.raises(NotFoundError):
            project_repo.get(project.id)

    def test_failed_delete_leaves_tasks_assigned(
        self, project_repo, task_repo, database
    ):
        project = project_repo.create(ProjectCreate(name="Home"))
        task = task_repo.add(TaskCreate(name="Clean", project_id=project.id))
        database.connection.execute(
            "CREATE TRIGGER keep_projects BEFORE DELETE ON projects "
            "BEGIN SELECT RAISE(ABORT, 'locked'); END"
        )

        with pytest.raises(StorageError, match="locked"):
            project_repo.delete(project.id)

        assert project_repo.get(project.id).name == "Home"
        assert task_repo.get(task.id).project_id == project.id

    def test_id_beyond_integer_range(self, project_repo):
        assert project_repo.exists(2**64) is False
        with pytest.raises(NotFoundError):
            project_repo.delete(2**64)
