"""Tests for the table and detail formatters."""

from __future__ import annotations

from io import StringIO

from rich.console import Console

from toado.models import EntityKind, Project, TableConfig, Task
from toado.utils.ui.formatters import (
    build_box,
    columns_for,
    format_detail,
    format_table,
    format_value,
)


def _render(renderable) -> str:
    console = Console(file=StringIO(), width=120, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


class TestBuildBox:
    def test_default_characters(self):
        box = build_box(TableConfig())
        assert box.head_vertical == "│"
        assert box.head_row_horizontal == "─"
        assert box.head_row_cross == "┼"
        assert box.top_divider == "┬"
        assert box.bottom_divider == "┴"

    def test_custom_characters(self):
        config = TableConfig(horizontal="=", vertical="!", vertical_horizontal="#")
        box = build_box(config)
        assert box.head_vertical == "!"
        assert box.head_row_horizontal == "="
        assert box.head_row_cross == "#"

    def test_without_column_separators(self):
        box = build_box(TableConfig(separate_columns=False))
        assert box.head_vertical == " "
        assert box.mid_vertical == " "
        assert box.head_row_cross == "─"


class TestFormatValue:
    def test_completed(self):
        assert format_value("completed", True) == "COMPLETE"
        assert format_value("completed", False) == "INCOMPLETE"

    def test_missing_value(self):
        assert format_value("priority", None) == "-"

    def test_plain_value(self):
        assert format_value("priority", 3) == "3"


class TestColumns:
    def test_task_columns(self):
        assert columns_for(EntityKind.TASK, verbose=False) == [
            "id",
            "name",
            "priority",
            "completed",
        ]

    def test_verbose_task_columns_include_notes(self):
        assert "notes" in columns_for(EntityKind.TASK, verbose=True)
        assert "repeat" in columns_for(EntityKind.TASK, verbose=True)

    def test_project_columns_have_no_status(self):
        assert "completed" not in columns_for(EntityKind.PROJECT, verbose=True)


class TestFormatTable:
    def test_rows_and_headers(self):
        tasks = [
            Task(id=1, name="Write report", priority=2),
            Task(id=2, name="Ship it", completed=True),
        ]
        output = _render(format_table(tasks, EntityKind.TASK, TableConfig()))

        assert "Status" in output
        assert "Write report" in output
        assert "INCOMPLETE" in output
        assert "COMPLETE" in output
        assert "│" in output

    def test_markup_in_names_is_not_interpreted(self):
        tasks = [Task(id=1, name="[bold]literal[/bold]")]
        output = _render(format_table(tasks, EntityKind.TASK, TableConfig()))
        assert "[bold]literal[/bold]" in output

    def test_verbose_shows_notes(self):
        tasks = [Task(id=1, name="Call", notes="after lunch")]
        plain = _render(format_table(tasks, EntityKind.TASK, TableConfig()))
        verbose = _render(format_table(tasks, EntityKind.TASK, TableConfig(), True))

        assert "after lunch" not in plain
        assert "after lunch" in verbose

    def test_separate_rows_draws_row_lines(self):
        projects = [Project(id=1, name="Home"), Project(id=2, name="Work")]
        config = TableConfig(separate_rows=True, horizontal="~")
        output = _render(format_table(projects, EntityKind.PROJECT, config))
        # header rule plus one rule between the two rows
        assert sum(1 for line in output.splitlines() if "~~~" in line) == 2


class TestFormatDetail:
    def test_task_detail(self):
        task = Task(
            id=12,
            name="Groceries",
            priority=1,
            project_id=3,
            start_time="2024-01-01",
            repeat="weekly",
            notes="milk",
        )
        text = format_detail(task, TableConfig()).plain
        lines = text.splitlines()

        assert lines[0] == "Groceries │ 12"
        assert lines[1] == "─" * 10 + "┴" + "─" * 3
        assert "Priority: 1" in lines
        assert "Status: INCOMPLETE" in lines
        assert "Project: 3" in lines
        assert "Start: 2024-01-01" in lines
        assert "Repeats: weekly" in lines
        assert "Notes: milk" in lines

    def test_missing_fields_are_omitted(self):
        project = Project(id=1, name="Home")
        text = format_detail(project, TableConfig()).plain

        assert "Priority" not in text
        assert "Status" not in text
        assert text.splitlines()[0] == "Home │ 1"
