"""Database schema definitions for the Toado SQLite database."""

from __future__ import annotations

# Projects table
CREATE_PROJECTS_TABLE = """
CREATE TABLE IF NOT EXISTS projects (
    id INTEGER PRIMARY KEY AUTOINCREMENT NOT NULL,
    name TEXT NOT NULL,
    priority INTEGER,
    start_time TEXT,
    end_time TEXT,
    notes TEXT
)
"""

# Tasks table
# AUTOINCREMENT keeps ids monotonic: an id is never handed out twice, even
# after the row holding the highest id is deleted.
CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT NOT NULL,
    name TEXT NOT NULL,
    priority INTEGER,
    completed BOOLEAN NOT NULL DEFAULT 0,
    project_id INTEGER,
    start_time TEXT,
    end_time TEXT,
    repeat TEXT,
    notes TEXT,
    FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE SET NULL
)
"""

# Tasks indexes
CREATE_TASK_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_project ON tasks(project_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_priority ON tasks(priority)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_name ON tasks(name)",
]

# Projects indexes
CREATE_PROJECT_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_projects_name ON projects(name)",
]

# All table creation statements in order
ALL_TABLES = [
    CREATE_PROJECTS_TABLE,
    CREATE_TASKS_TABLE,
]

# All index creation statements
ALL_INDEXES = CREATE_TASK_INDEXES + CREATE_PROJECT_INDEXES

# Columns readable through the repositories, per table
TASK_COLUMNS = (
    "id",
    "name",
    "priority",
    "completed",
    "project_id",
    "start_time",
    "end_time",
    "repeat",
    "notes",
)
PROJECT_COLUMNS = ("id", "name", "priority", "start_time", "end_time", "notes")
