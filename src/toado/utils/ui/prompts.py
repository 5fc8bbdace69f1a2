"""Line prompts used when toado runs in an interactive terminal."""

from __future__ import annotations

import typer
from rich.markup import escape

from toado.models import EntityKind, Project, Task
from toado.utils.ui.console import get_console

console = get_console()

# (field, label) pairs offered by the update editor
EDITABLE_FIELDS = [
    ("name", "Name"),
    ("priority", "Priority"),
    ("start_time", "Start time"),
    ("end_time", "End time"),
    ("repeat", "Repeats"),
    ("notes", "Notes"),
]


def _pick_index(count: int):
    def convert(value: str) -> int:
        try:
            index = int(value) - 1
        except ValueError:
            index = -1
        if not 0 <= index < count:
            raise typer.BadParameter(f"Enter a number from 1 to {count}")
        return index

    return convert


def _prompt_field(label: str, current: object) -> str | None:
    """Prompt for a field value; None keeps the current value."""
    shown = "" if current is None else current
    value = typer.prompt(f"  {label} [{shown}]", default="", show_default=False)
    return value if value != "" else None


class TerminalPrompter:
    """Asks the user to settle what a command cannot decide on its own."""

    def choose(self, kind: EntityKind, records: list[Task | Project]) -> Task | Project:
        """Let the user pick one of several records matching a term."""
        console.print(f"[yellow]Several {kind.plural} match:[/yellow]")
        for number, record in enumerate(records, 1):
            console.print(
                f"  {number}. {escape(record.name)} ({record.id})", highlight=False
            )
        index = typer.prompt(
            "Pick a number", default="1", value_proc=_pick_index(len(records))
        )
        return records[index]

    def edit(self, kind: EntityKind, record: Task | Project) -> dict[str, str]:
        """Prompt for each field, showing its current value.

        Returns the raw text of the fields the user changed. Typing ``null``
        clears an optional field.
        """
        console.print(f"\n[bold cyan]Editing:[/bold cyan] {escape(record.name)}")
        console.print("[dim](Press Enter to keep a value, type null to clear it)[/dim]\n")

        changes = {}
        for field, label in EDITABLE_FIELDS:
            if field == "repeat" and kind is not EntityKind.TASK:
                continue
            value = _prompt_field(label, getattr(record, field))
            if value is not None:
                changes[field] = value
        return changes
