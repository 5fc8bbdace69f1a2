"""Output formatters for tasks and projects."""

from rich import box
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from toado.models import EntityKind, Project, TableConfig, Task
from toado.utils.ui.console import get_console

console = get_console()

TASK_COLUMNS = ["id", "name", "priority", "completed"]
TASK_VERBOSE_COLUMNS = ["project_id", "start_time", "end_time", "repeat", "notes"]
PROJECT_COLUMNS = ["id", "name", "priority", "start_time", "end_time"]
PROJECT_VERBOSE_COLUMNS = ["notes"]

COLUMN_TITLES = {
    "id": "ID",
    "completed": "Status",
    "project_id": "Project",
    "start_time": "Start",
    "end_time": "End",
}


def build_box(config: TableConfig) -> box.Box:
    """Build a Rich box from the configured border characters.

    With ``separate_columns`` off the vertical lines are blank and the
    junctions collapse into plain horizontal rules.
    """
    horizontal = config.horizontal
    if config.separate_columns:
        vertical = config.vertical
        cross = config.vertical_horizontal
        down = config.down_horizontal
        up = config.up_horizontal
    else:
        vertical = " "
        cross = down = up = horizontal

    cell = f"{vertical} {vertical}{vertical}"
    rule = f"{config.vertical_right}{horizontal}{cross}{config.vertical_left}"
    lines = [
        f"{config.down_right}{horizontal}{down}{config.down_left}",
        cell,
        rule,
        cell,
        rule,
        rule,
        cell,
        f"{config.up_right}{horizontal}{up}{config.up_left}",
    ]
    return box.Box("\n".join(lines) + "\n")


def format_value(key: str, value) -> str:
    """Format a single field for display."""
    if key == "completed":
        return "COMPLETE" if value else "INCOMPLETE"
    if value is None:
        return "-"
    return str(value)


def columns_for(kind: EntityKind, verbose: bool) -> list[str]:
    if kind is EntityKind.TASK:
        return TASK_COLUMNS + (TASK_VERBOSE_COLUMNS if verbose else [])
    return PROJECT_COLUMNS + (PROJECT_VERBOSE_COLUMNS if verbose else [])


def format_table(
    records: list[Task] | list[Project],
    kind: EntityKind,
    config: TableConfig,
    verbose: bool = False,
) -> Table:
    """Format a list of tasks or projects as a table."""
    columns = columns_for(kind, verbose)

    table = Table(
        box=build_box(config),
        show_edge=False,
        show_lines=config.separate_rows,
        header_style="bold magenta",
    )
    for col in columns:
        table.add_column(COLUMN_TITLES.get(col, col.replace("_", " ").title()))

    for record in records:
        data = record.model_dump()
        table.add_row(*(Text(format_value(col, data[col])) for col in columns))

    return table


def format_detail(record: Task | Project, config: TableConfig) -> Text:
    """Format a single task or project as a block of labelled lines.

    The heading is the name and id separated by the vertical border
    character and underlined with the horizontal one.
    """
    name = record.name
    entity_id = str(record.id)
    lines = [
        f"{name} {config.vertical} {entity_id}",
        config.horizontal * (len(name) + 1)
        + config.up_horizontal
        + config.horizontal * (len(entity_id) + 1),
    ]

    if record.priority is not None:
        lines.append(f"Priority: {record.priority}")
    if isinstance(record, Task):
        lines.append(f"Status: {format_value('completed', record.completed)}")
        if record.project_id is not None:
            lines.append(f"Project: {record.project_id}")

    if record.start_time is not None:
        lines.append(f"Start: {record.start_time}")
    if record.end_time is not None:
        lines.append(f"End: {record.end_time}")
    if isinstance(record, Task) and record.repeat is not None:
        lines.append(f"Repeats: {record.repeat}")
    if record.notes is not None:
        lines.append(f"Notes: {record.notes}")

    return Text("\n".join(lines))


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}", highlight=False)


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {escape(message)}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {escape(message)}")
