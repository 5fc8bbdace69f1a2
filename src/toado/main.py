"""Main entry point for the Toado CLI."""

import sys
from dataclasses import dataclass
from pathlib import Path

import typer

from toado import __version__
from toado.adapters.sqlite import (
    DatabaseConnection,
    SqliteProjectRepository,
    SqliteTaskRepository,
)
from toado.commands import (
    AddRequest,
    AssignRequest,
    CheckRequest,
    CommandResult,
    DeleteRequest,
    Dispatcher,
    ListRequest,
    Request,
    SearchRequest,
    UnassignRequest,
    UpdateRequest,
)
from toado.commands.decorators import command_wrapper
from toado.commands.dispatcher import validate_name
from toado.config import ConfigManager, Settings
from toado.errors import ValidationError
from toado.models import EntityKind, OrderBy, OrderDir
from toado.services import StorageService
from toado.utils.typer_helpers import SearchByDefaultGroup
from toado.utils.ui.console import get_console
from toado.utils.ui.prompts import TerminalPrompter

app = typer.Typer(
    name="toado",
    cls=SearchByDefaultGroup,
    help="Manage tasks and projects from the command line.",
    options_metavar="[OPTIONS] [SEARCH]",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = get_console()


@dataclass
class CliState:
    """Global options shared with every subcommand."""

    settings: Settings
    task: bool = False
    project: bool = False
    verbose: bool = False


def _state(ctx: typer.Context) -> CliState:
    return ctx.find_object(CliState)


def _kind(ctx: typer.Context, task: bool, project: bool) -> EntityKind:
    """Pick the entity kind from command and global flags; tasks win ties."""
    state = _state(ctx)
    task = task or state.task
    project = project or state.project
    if project and not task:
        return EntityKind.PROJECT
    return EntityKind.TASK


def _print_result(result: CommandResult) -> None:
    if result.view is not None:
        console.print(result.view)
    if result.message:
        console.print(result.message, markup=False, highlight=False)
    if result.footer:
        console.print()
        console.print(result.footer, style="dim", highlight=False)


def _interactive() -> bool:
    return sys.stdin.isatty()


def _run(ctx: typer.Context, request: Request) -> None:
    """Open storage for one request, dispatch it and print the result."""
    settings = _state(ctx).settings
    config = ConfigManager(settings.config_path).config

    with DatabaseConnection(settings.database_path) as database:
        storage = StorageService(
            SqliteTaskRepository(database), SqliteProjectRepository(database)
        )
        prompter = TerminalPrompter() if _interactive() else None
        result = Dispatcher(storage, config, prompter).dispatch(request)

    _print_result(result)


def _checked_name(value: str) -> str:
    try:
        return validate_name(value)
    except ValidationError as e:
        raise typer.BadParameter(str(e)) from e


def _prompt_term(term: str | None, kind: EntityKind) -> str:
    """Ask for the id or name when it was left off the command line."""
    if term is not None:
        return term
    return typer.prompt(f"{kind.label} name or id")


def _prompt_optional(label: str) -> str | None:
    value = typer.prompt(f"{label} (optional)", default="", show_default=False)
    return value.strip() or None


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"toado {__version__}", highlight=False)
        raise typer.Exit()


TASK_OPTION = typer.Option(False, "--task", "-t", help="Operate on tasks (default)")
PROJECT_OPTION = typer.Option(False, "--project", "-p", help="Operate on projects")
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Show every field")


@app.callback()
def root(
    ctx: typer.Context,
    task: bool = TASK_OPTION,
    project: bool = PROJECT_OPTION,
    verbose: bool = VERBOSE_OPTION,
    file: Path | None = typer.Option(
        None, "--file", "-f", help="Path to the database file", dir_okay=False
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to the config file", dir_okay=False
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Manage tasks and projects from the command line.

    A bare SEARCH term runs the search command.
    """
    ctx.obj = CliState(
        settings=Settings.from_options(file=file, config=config),
        task=task,
        project=project,
        verbose=verbose,
    )


@app.command()
@command_wrapper
def search(
    ctx: typer.Context,
    term: str = typer.Argument(..., help="Id or part of the name to search for"),
    task: bool = TASK_OPTION,
    project: bool = PROJECT_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Search for tasks or projects by id or name."""
    _run(
        ctx,
        SearchRequest(
            kind=_kind(ctx, task, project),
            term=term,
            verbose=verbose or _state(ctx).verbose,
        ),
    )


@app.command()
@command_wrapper
def add(
    ctx: typer.Context,
    name: str | None = typer.Argument(None, help="Name of the new item"),
    task: bool = TASK_OPTION,
    project: bool = PROJECT_OPTION,
    priority: int | None = typer.Option(
        None, "--priority", "-i", min=0, help="Priority, higher is more important"
    ),
    start_time: str | None = typer.Option(None, "--start", "-s", help="Start time"),
    end_time: str | None = typer.Option(None, "--end", "-e", help="End time"),
    repeat: str | None = typer.Option(
        None, "--repeat", "-r", help="Repetition (tasks only)"
    ),
    notes: str | None = typer.Option(None, "--notes", "-n", help="Notes"),
    optional: bool = typer.Option(
        False, "--optional", "-o", help="Skip prompts for optional fields"
    ),
) -> None:
    """Add a new task or project.

    Without a NAME the fields are prompted for interactively.
    """
    kind = _kind(ctx, task, project)

    if name is None:
        name = typer.prompt("Name", value_proc=_checked_name)
        if not optional:
            if priority is None:
                text = _prompt_optional("Priority")
                if text is not None:
                    try:
                        priority = int(text)
                    except ValueError as e:
                        raise ValidationError(
                            f"Priority must be a non-negative integer, got {text!r}"
                        ) from e
            start_time = start_time or _prompt_optional("Start time")
            end_time = end_time or _prompt_optional("End time")
            if kind is EntityKind.TASK:
                repeat = repeat or _prompt_optional("Repeats")
            notes = notes or _prompt_optional("Notes")

    _run(
        ctx,
        AddRequest(
            kind=kind,
            name=name,
            priority=priority,
            start_time=start_time,
            end_time=end_time,
            repeat=repeat,
            notes=notes,
        ),
    )


@app.command()
@command_wrapper
def delete(
    ctx: typer.Context,
    term: str | None = typer.Argument(None, help="Id or name of the item to delete"),
    task: bool = TASK_OPTION,
    project: bool = PROJECT_OPTION,
) -> None:
    """Delete a task or project."""
    kind = _kind(ctx, task, project)
    _run(ctx, DeleteRequest(kind=kind, term=_prompt_term(term, kind)))


@app.command()
@command_wrapper
def update(
    ctx: typer.Context,
    term: str | None = typer.Argument(None, help="Id or name of the item to update"),
    task: bool = TASK_OPTION,
    project: bool = PROJECT_OPTION,
    name: str | None = typer.Option(None, "--name", "-N", help="New name"),
    priority: str | None = typer.Option(
        None, "--priority", "-i", help="New priority, or 'null' to clear"
    ),
    start_time: str | None = typer.Option(
        None, "--start", "-s", help="New start time, or 'null' to clear"
    ),
    end_time: str | None = typer.Option(
        None, "--end", "-e", help="New end time, or 'null' to clear"
    ),
    repeat: str | None = typer.Option(
        None, "--repeat", "-r", help="New repetition, or 'null' to clear"
    ),
    notes: str | None = typer.Option(
        None, "--notes", "-n", help="New notes, or 'null' to clear"
    ),
) -> None:
    """Update fields of a task or project. Only the given fields change.

    Without field options an interactive terminal prompts for each field.
    """
    kind = _kind(ctx, task, project)
    fields = {
        "name": name,
        "priority": priority,
        "start_time": start_time,
        "end_time": end_time,
        "repeat": repeat,
        "notes": notes,
    }
    _run(
        ctx,
        UpdateRequest(
            kind=kind,
            term=_prompt_term(term, kind),
            changes={key: value for key, value in fields.items() if value is not None},
        ),
    )


@app.command("ls")
@command_wrapper
def ls(
    ctx: typer.Context,
    order_by: OrderBy | None = typer.Argument(
        None, help="Field to order by", case_sensitive=False
    ),
    task: bool = TASK_OPTION,
    project: bool = PROJECT_OPTION,
    verbose: bool = VERBOSE_OPTION,
    asc: bool = typer.Option(
        False, "--asc", "-a", help="Ascending order (default, except priority)"
    ),
    desc: bool = typer.Option(
        False, "--desc", "-d", help="Descending order (default for priority)"
    ),
    limit: int | None = typer.Option(
        None, "--limit", "-l", min=0, help="Maximum number of items (default 10)"
    ),
    offset: int | None = typer.Option(
        None, "--offset", "-o", min=0, help="Number of items to skip"
    ),
    full: bool = typer.Option(
        False, "--full", "-f", help="List every item with every field"
    ),
) -> None:
    """List tasks or projects."""
    direction = None
    if asc:
        direction = OrderDir.ASC
    elif desc:
        direction = OrderDir.DESC

    _run(
        ctx,
        ListRequest(
            kind=_kind(ctx, task, project),
            order_by=order_by,
            direction=direction,
            limit=limit,
            offset=offset,
            verbose=verbose or _state(ctx).verbose,
            full=full,
        ),
    )


@app.command()
@command_wrapper
def check(
    ctx: typer.Context,
    term: str | None = typer.Argument(None, help="Id or name of the task"),
    incomplete: bool = typer.Option(
        False, "--incomplete", "-i", help="Mark the task incomplete instead"
    ),
) -> None:
    """Mark a task complete."""
    _run(
        ctx,
        CheckRequest(term=_prompt_term(term, EntityKind.TASK), incomplete=incomplete),
    )


@app.command()
@command_wrapper
def assign(
    ctx: typer.Context,
    task_term: str | None = typer.Argument(None, help="Id or name of the task"),
    project_term: str | None = typer.Argument(
        None, help="Id or name of the project"
    ),
) -> None:
    """Assign a task to a project."""
    _run(
        ctx,
        AssignRequest(
            task_term=_prompt_term(task_term, EntityKind.TASK),
            project_term=_prompt_term(project_term, EntityKind.PROJECT),
        ),
    )


@app.command()
@command_wrapper
def unassign(
    ctx: typer.Context,
    task_term: str | None = typer.Argument(None, help="Id or name of the task"),
) -> None:
    """Remove a task from its project."""
    _run(ctx, UnassignRequest(task_term=_prompt_term(task_term, EntityKind.TASK)))


@app.command("help")
def help_command(ctx: typer.Context) -> None:
    """Show this help message."""
    typer.echo(ctx.parent.get_help())


# Main entry point
def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
