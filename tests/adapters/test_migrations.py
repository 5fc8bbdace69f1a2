"""Unit tests for the MigrationRunner in migrations/runner.py."""

from __future__ import annotations

import sqlite3

import pytest

from toado.adapters.sqlite.migrations import Migration, MigrationRunner
from toado.adapters.sqlite.migrations.m001_initial_schema import (
    ALL_MIGRATIONS,
    InitialSchemaMigration,
)


class _CreateOne(Migration):
    version = 1
    description = "Create table_one"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute("CREATE TABLE table_one (id INTEGER PRIMARY KEY, name TEXT)")


class _CreateTwo(Migration):
    version = 2
    description = "Create table_two"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute("CREATE TABLE table_two (id INTEGER PRIMARY KEY, value TEXT)")


class _Broken(Migration):
    version = 3
    description = "Fails halfway"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute("INSERT INTO table_one (name) VALUES ('partial')")
        raise sqlite3.OperationalError("boom")


@pytest.fixture
def mem_conn():
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    yield conn
    conn.close()


@pytest.fixture
def runner(mem_conn):
    return MigrationRunner(mem_conn)


def _tables(conn: sqlite3.Connection) -> set[str]:
    rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
    return {row[0] for row in rows}


class TestMigrationRunner:
    def test_creates_version_table(self, runner, mem_conn):
        assert "schema_version" in _tables(mem_conn)

    def test_fresh_database_is_version_zero(self, runner):
        assert runner.current_version() == 0

    def test_run_sorts_by_version(self, runner, mem_conn):
        applied = runner.run([_CreateTwo(), _CreateOne()])

        assert [m.version for m in applied] == [1, 2]
        assert runner.current_version() == 2
        assert {"table_one", "table_two"} <= _tables(mem_conn)

    def test_run_skips_applied(self, runner):
        runner.run([_CreateOne()])
        assert runner.run([_CreateOne(), _CreateTwo()])[0].version == 2
        assert runner.run([_CreateOne(), _CreateTwo()]) == []

    def test_apply_rejects_old_version(self, runner):
        runner.run([_CreateOne(), _CreateTwo()])
        with pytest.raises(ValueError, match="not greater"):
            runner.apply(_CreateOne())

    def test_failure_rolls_back(self, runner, mem_conn):
        runner.run([_CreateOne(), _CreateTwo()])
        with pytest.raises(RuntimeError, match="Migration 3 failed: boom"):
            runner.apply(_Broken())

        assert runner.current_version() == 2
        assert mem_conn.execute("SELECT COUNT(*) FROM table_one").fetchone()[0] == 0

    def test_history(self, runner):
        runner.run([_CreateOne(), _CreateTwo()])
        history = runner.history()

        assert [entry["version"] for entry in history] == [1, 2]
        assert history[0]["description"] == "Create table_one"
        assert history[0]["applied_at"]


class TestInitialSchema:
    def test_creates_tasks_and_projects(self, runner, mem_conn):
        runner.run(ALL_MIGRATIONS)

        assert {"tasks", "projects"} <= _tables(mem_conn)
        assert runner.current_version() == InitialSchemaMigration.version

    def test_task_columns(self, runner, mem_conn):
        runner.run(ALL_MIGRATIONS)
        columns = [row[1] for row in mem_conn.execute("PRAGMA table_info(tasks)")]

        assert columns == [
            "id",
            "name",
            "priority",
            "completed",
            "project_id",
            "start_time",
            "end_time",
            "repeat",
            "notes",
        ]
