"""Toado domain models.

This package contains Pydantic models for the two entity kinds Toado stores
(tasks and projects), the listing filters, and the configuration file.
"""

from .config_models import AppConfig, ListConfig, TableConfig
from .core import (
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
)
from .validation import describe_errors

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    # Project models
    "Project",
    "ProjectCreate",
    "ProjectUpdate",
    # Listing
    "EntityKind",
    "ListFilters",
    "OrderBy",
    "OrderDir",
    # Config models
    "AppConfig",
    "ListConfig",
    "TableConfig",
    # Validation
    "describe_errors",
]
