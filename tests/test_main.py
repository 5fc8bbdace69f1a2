"""End-to-end tests for the toado CLI (main.py)."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from toado import __version__
from toado.adapters.sqlite import (
    DatabaseConnection,
    SqliteProjectRepository,
    SqliteTaskRepository,
)
from toado.main import app
from toado.models import EntityKind
from toado.services import StorageService
from toado.utils.ui.console import get_console

runner = CliRunner()


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Render tables wide enough that no cell wraps."""
    monkeypatch.setattr(get_console(), "width", 200)


@pytest.fixture
def db_file(tmp_path):
    return str(tmp_path / "cli.db")


@pytest.fixture
def toado(db_file):
    """Invoke the CLI against a temp database."""

    def invoke(*args, input=None):
        return runner.invoke(app, ["-f", db_file, *args], input=input)

    return invoke


def _get_task(db_file, task_id):
    with DatabaseConnection(db_file) as database:
        storage = StorageService(
            SqliteTaskRepository(database), SqliteProjectRepository(database)
        )
        return storage.get(EntityKind.TASK, task_id)


class TestGlobalOptions:
    def test_version(self):
        result = runner.invoke(app, ["-V"])
        assert result.exit_code == 0
        assert f"toado {__version__}" in result.output

    def test_help(self):
        result = runner.invoke(app, ["-h"])
        assert result.exit_code == 0
        assert "ls" in result.output
        assert "assign" in result.output

    def test_help_command(self):
        result = runner.invoke(app, ["help"])
        assert result.exit_code == 0
        assert "unassign" in result.output

    def test_default_paths_are_created(self, isolated_dirs):
        result = runner.invoke(app, ["ls"])

        assert result.exit_code == 0
        assert (isolated_dirs / "data" / "database").exists()
        assert (isolated_dirs / "config" / "config.toml").exists()


class TestScenario:
    def test_add_list_check_delete(self, toado):
        result = toado("add", "Write report")
        assert result.exit_code == 0
        assert "Created task Write report with id 1" in result.output

        result = toado("ls")
        assert result.exit_code == 0
        assert "Write report" in result.output
        assert "INCOMPLETE" in result.output
        assert "0-1 of 1" in result.output

        result = toado("check", "1")
        assert result.exit_code == 0

        result = toado("ls")
        assert "COMPLETE" in result.output
        assert "INCOMPLETE" not in result.output

        result = toado("delete", "1")
        assert result.exit_code == 0

        result = toado("ls")
        assert result.exit_code == 0
        assert "No tasks found" in result.output
        assert "0-0 of 0" in result.output


class TestAdd:
    def test_add_with_options(self, toado, db_file):
        result = toado("add", "Gym", "-i", "3", "-s", "07:00", "-r", "daily", "-n", "legs")
        assert result.exit_code == 0

        task = _get_task(db_file, 1)
        assert (task.priority, task.start_time, task.repeat, task.notes) == (
            3,
            "07:00",
            "daily",
            "legs",
        )

    def test_prompts_for_missing_fields(self, toado, db_file):
        result = toado("add", input="Buy milk\n2\n\n\n\nfrom the shop\n")
        assert result.exit_code == 0, result.output

        task = _get_task(db_file, 1)
        assert task.name == "Buy milk"
        assert task.priority == 2
        assert task.start_time is None
        assert task.notes == "from the shop"

    def test_optional_flag_skips_optional_prompts(self, toado, db_file):
        result = toado("add", "-o", input="Buy milk\n")
        assert result.exit_code == 0, result.output
        assert _get_task(db_file, 1).priority is None

    def test_prompted_priority_must_be_a_number(self, toado):
        result = toado("add", input="Buy milk\nsoon\n")
        assert result.exit_code == 2
        assert "Priority must be a non-negative integer" in result.output

    def test_invalid_prompted_name_is_asked_again(self, toado, db_file):
        result = toado("add", "-o", input="2 eggs\nEggs\n")

        assert result.exit_code == 0, result.output
        assert "Name must not begin with a digit" in result.output
        assert _get_task(db_file, 1).name == "Eggs"

    def test_digit_name_is_invalid(self, toado):
        result = toado("add", "2 eggs")
        assert result.exit_code == 2
        assert "Error:" in result.output

    def test_negative_priority_is_a_usage_error(self, toado):
        result = toado("add", "Gym", "-i", "-1")
        assert result.exit_code != 0

    def test_projects_do_not_repeat(self, toado):
        result = toado("add", "-p", "Home", "-r", "daily")
        assert result.exit_code == 2


class TestSearch:
    def test_bare_term_searches(self, toado):
        toado("add", "Write report")
        result = toado("report")

        assert result.exit_code == 0
        assert "Write report │ 1" in result.output
        assert "Status: INCOMPLETE" in result.output

    def test_bare_term_with_project_flag(self, toado):
        toado("add", "-p", "Home")
        toado("add", "Homework")

        result = toado("-p", "home")

        assert result.exit_code == 0
        assert "Home │ 1" in result.output
        assert "Homework" not in result.output

    def test_no_match_exits_zero(self, toado):
        result = toado("search", "nothing")
        assert result.exit_code == 0
        assert "No tasks match 'nothing'" in result.output

    def test_several_matches_render_a_table(self, toado):
        toado("add", "call mum")
        toado("add", "call dad")

        result = toado("search", "call")

        assert "call mum" in result.output
        assert "call dad" in result.output


class TestUpdate:
    def test_update_and_clear(self, toado, db_file):
        toado("add", "Gym", "-i", "3", "-n", "legs")

        result = toado("update", "gym", "-N", "Gym session", "-n", "null")

        assert result.exit_code == 0
        task = _get_task(db_file, 1)
        assert task.name == "Gym session"
        assert task.notes is None
        assert task.priority == 3

    def test_ambiguous_term(self, toado):
        toado("add", "call mum")
        toado("add", "call dad")

        result = toado("update", "call", "-i", "1")

        assert result.exit_code == 2
        assert "ambiguous" in result.output


class TestListOptions:
    def test_project_listing_with_global_flag(self, toado):
        toado("add", "-p", "Work")
        toado("add", "-p", "Garden")

        result = toado("-p", "ls")

        assert result.exit_code == 0
        assert result.output.index("Garden") < result.output.index("Work")

    def test_descending_name_order(self, toado):
        toado("add", "alpha")
        toado("add", "beta")

        result = toado("ls", "name", "-d")

        assert result.output.index("beta") < result.output.index("alpha")

    def test_limit_offset_footer(self, toado):
        for name in ["a", "b", "c", "d"]:
            toado("add", name)

        result = toado("ls", "id", "-l", "2", "-o", "1")

        assert "1-3 of 4" in result.output

    def test_full_has_no_footer(self, toado):
        toado("add", "alpha", "-n", "remember")

        result = toado("ls", "-f")

        assert "remember" in result.output
        assert " of " not in result.output

    def test_config_controls_borders(self, toado, tmp_path):
        config = tmp_path / "config.toml"
        config.write_text('[table]\nvertical = "!"\n', encoding="utf-8")
        toado("add", "alpha")

        result = toado("-c", str(config), "ls")

        assert result.exit_code == 0
        assert "!" in result.output
        assert "│" not in result.output


class TestAssignment:
    def test_assign_and_unassign(self, toado, db_file):
        toado("add", "Clean")
        toado("add", "-p", "Home")

        result = toado("assign", "clean", "home")
        assert result.exit_code == 0
        assert _get_task(db_file, 1).project_id == 1

        result = toado("unassign", "1")
        assert result.exit_code == 0
        assert _get_task(db_file, 1).project_id is None

    def test_deleting_project_unassigns(self, toado, db_file):
        toado("add", "Clean")
        toado("add", "-p", "Home")
        toado("assign", "1", "1")

        result = toado("delete", "-p", "1")

        assert result.exit_code == 0
        assert _get_task(db_file, 1).project_id is None


class TestInteractive:
    @pytest.fixture(autouse=True)
    def terminal(self, monkeypatch):
        monkeypatch.setattr("toado.main._interactive", lambda: True)

    def test_missing_term_is_prompted(self, toado, db_file):
        toado("add", "Gym")

        result = toado("check", input="gym\n")

        assert result.exit_code == 0, result.output
        assert "Task name or id" in result.output
        assert _get_task(db_file, 1).completed is True

    def test_ambiguous_term_asks_for_a_pick(self, toado):
        toado("add", "call mum")
        toado("add", "call dad")

        result = toado("delete", "call", input="2\n")

        assert result.exit_code == 0, result.output
        assert "Several tasks match" in result.output
        assert "Deleted task call dad with id 2" in result.output

    def test_invalid_pick_is_asked_again(self, toado):
        toado("add", "call mum")
        toado("add", "call dad")

        result = toado("delete", "call", input="7\n1\n")

        assert result.exit_code == 0, result.output
        assert "Enter a number from 1 to 2" in result.output
        assert "Deleted task call mum with id 1" in result.output

    def test_update_without_options_prompts_each_field(self, toado, db_file):
        toado("add", "Gym", "-i", "3", "-n", "legs")

        # name, priority, start, end, repeats, notes
        result = toado("update", "gym", input="\n7\n\n\n\nnull\n")

        assert result.exit_code == 0, result.output
        assert "Editing: Gym" in result.output
        task = _get_task(db_file, 1)
        assert (task.name, task.priority, task.notes) == ("Gym", 7, None)

    def test_update_prompts_skip_repeat_for_projects(self, toado):
        toado("add", "-p", "Home")

        result = toado("update", "-p", "home", input="\n\n\n\n\n")

        assert result.exit_code == 0, result.output
        assert "Repeats" not in result.output
        assert "No changes made" in result.output


class TestExitCodes:
    def test_not_found(self, toado):
        result = toado("delete", "3")
        assert result.exit_code == 5
        assert "Error: Task not found: 3" in result.output

    def test_id_beyond_integer_range(self, toado):
        huge = "99999999999999999999"

        assert toado("search", huge).exit_code == 0
        assert toado("delete", huge).exit_code == 5
        assert toado("check", huge).exit_code == 5

    def test_missing_explicit_config(self, tmp_path):
        result = runner.invoke(app, ["-c", str(tmp_path / "missing.toml"), "ls"])
        assert result.exit_code == 4
        assert "Config file not found" in result.output

    def test_invalid_config(self, tmp_path):
        config = tmp_path / "config.toml"
        config.write_text('[table]\nhorizontal = "=="\n', encoding="utf-8")

        result = runner.invoke(app, ["-c", str(config), "ls"])

        assert result.exit_code == 4

    def test_corrupt_database(self, tmp_path):
        db = tmp_path / "corrupt.db"
        db.write_bytes(b"not a database at all " * 100)

        result = runner.invoke(app, ["-f", str(db), "ls"])

        assert result.exit_code == 3
        assert "Error:" in result.output
