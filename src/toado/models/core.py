"""Domain models for tasks and projects.

Attributes shared by both entity kinds (name, priority, timing and notes)
live on small base classes; the create and update payloads validate user
input before it reaches the database.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EntityKind(str, Enum):
    """Discriminator selecting the table an operation works on."""

    TASK = "task"
    PROJECT = "project"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def plural(self) -> str:
        return f"{self.value}s"


class OrderBy(str, Enum):
    """Column used to sort listed entities."""

    ID = "id"
    NAME = "name"
    PRIORITY = "priority"


class OrderDir(str, Enum):
    """Direction of a listing: smallest value first or largest value first."""

    ASC = "asc"
    DESC = "desc"


def _require_name(value: str | None) -> str:
    if value is None or not value.strip():
        raise ValueError("name must not be empty")
    return value


class Task(BaseModel):
    """Task model representing a stored task row.

    Attributes:
        id: Storage-assigned identifier
        name: Task name
        priority: Optional rank, higher is more important
        completed: Completion status
        project_id: Optional reference to the owning project
        start_time: Optional start time in ISO 8601 format
        end_time: Optional end time in ISO 8601 format
        repeat: Optional description of how the task repeats
        notes: Optional free-form notes
    """

    id: int
    name: str
    priority: int | None = None
    completed: bool = False
    project_id: int | None = None
    start_time: str | None = None
    end_time: str | None = None
    repeat: str | None = None
    notes: str | None = None


class TaskCreate(BaseModel):
    """Model for creating a new task.

    Unknown fields are rejected so that typos in field names surface as
    validation errors instead of being dropped.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    priority: int | None = Field(default=None, ge=0)
    project_id: int | None = None
    start_time: str | None = None
    end_time: str | None = None
    repeat: str | None = None
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        return _require_name(value)


class TaskUpdate(BaseModel):
    """Model for updating an existing task.

    Only explicitly supplied fields are written. Supplying ``None`` for an
    optional field clears it; ``name`` and ``completed`` cannot be cleared.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    priority: int | None = Field(default=None, ge=0)
    completed: bool | None = None
    project_id: int | None = None
    start_time: str | None = None
    end_time: str | None = None
    repeat: str | None = None
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str | None) -> str:
        return _require_name(value)

    @field_validator("completed")
    @classmethod
    def _completed_not_null(cls, value: bool | None) -> bool:
        if value is None:
            raise ValueError("completed cannot be cleared")
        return value


class Project(BaseModel):
    """Project model representing a stored project row."""

    id: int
    name: str
    priority: int | None = None
    start_time: str | None = None
    end_time: str | None = None
    notes: str | None = None


class ProjectCreate(BaseModel):
    """Model for creating a new project."""

    model_config = ConfigDict(extra="forbid")

    name: str
    priority: int | None = Field(default=None, ge=0)
    start_time: str | None = None
    end_time: str | None = None
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        return _require_name(value)


class ProjectUpdate(BaseModel):
    """Model for updating an existing project.

    Same partial-update rules as TaskUpdate.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    priority: int | None = Field(default=None, ge=0)
    start_time: str | None = None
    end_time: str | None = None
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str | None) -> str:
        return _require_name(value)


class ListFilters(BaseModel):
    """Filters, ordering and pagination for listing tasks or projects.

    Attributes:
        search: Case-insensitive substring matched against the name
        order_by: Column to sort by
        direction: Sort direction
        limit: Maximum number of results
        offset: Number of results to skip after ordering
    """

    search: str | None = None
    order_by: OrderBy = OrderBy.ID
    direction: OrderDir = OrderDir.ASC
    limit: int | None = Field(default=None, ge=0)
    offset: int | None = Field(default=None, ge=0)
