"""Command dispatcher - turns typed requests into storage calls.

The dispatcher is stateless between requests. Each call to ``dispatch``
resolves the terms it was given, performs one or more StorageService
operations and returns a CommandResult for the CLI to print.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Protocol

from rich.console import RenderableType

from toado.commands.requests import (
    AddRequest,
    AssignRequest,
    CheckRequest,
    DeleteRequest,
    ListRequest,
    Request,
    SearchRequest,
    UnassignRequest,
    UpdateRequest,
)
from toado.errors import NotFoundError, ValidationError
from toado.models import AppConfig, EntityKind, OrderBy, OrderDir, Project, Task
from toado.services import StorageService
from toado.utils.ui.formatters import format_detail, format_table

DEFAULT_LIST_LIMIT = 10
NULL_VALUE = "null"

_ID_TERM = re.compile(r"[0-9]+")


@dataclass
class CommandResult:
    """Output of one command.

    Attributes:
        message: Short confirmation line
        view: Table or detail view
        footer: Pagination footer for listings
    """

    message: str | None = None
    view: RenderableType | None = None
    footer: str | None = None


class Prompter(Protocol):
    """Interactive fallbacks for the dispatcher."""

    def choose(
        self, kind: EntityKind, records: list[Task | Project]
    ) -> Task | Project: ...

    def edit(self, kind: EntityKind, record: Task | Project) -> dict[str, str]: ...


def is_id_term(term: str) -> bool:
    """Terms made only of ASCII digits are ids."""
    return _ID_TERM.fullmatch(term) is not None


def validate_name(name: str) -> str:
    """Reject names that could be mistaken for an id.

    Raises:
        ValidationError: If the name is empty or starts with a digit
    """
    stripped = name.strip()
    if not stripped:
        raise ValidationError("Name must not be empty")
    if stripped[0].isdigit():
        raise ValidationError(f"Name must not begin with a digit: {name!r}")
    return name


def list_footer(offset: int | None, count: int, total: int) -> str:
    start = offset or 0
    return f"{start}-{start + count} of {total}"


class Dispatcher:
    """Executes command requests against a StorageService.

    With a ``prompter`` the user picks among ambiguous matches and edits
    fields in turn when ``update`` gets no field options. Without one those
    cases are validation errors.
    """

    def __init__(
        self,
        storage: StorageService,
        config: AppConfig,
        prompter: Prompter | None = None,
    ):
        self.storage = storage
        self.config = config
        self.prompter = prompter

    def dispatch(self, request: Request) -> CommandResult:
        """Run a request and return what should be printed."""
        match request:
            case SearchRequest():
                return self.search(request)
            case AddRequest():
                return self.add(request)
            case DeleteRequest():
                return self.delete(request)
            case UpdateRequest():
                return self.update(request)
            case ListRequest():
                return self.ls(request)
            case CheckRequest():
                return self.check(request)
            case AssignRequest():
                return self.assign(request)
            case UnassignRequest():
                return self.unassign(request)
        raise ValidationError(f"Unsupported command: {request!r}")

    # ------------------------------------------------------------------
    # Term resolution
    # ------------------------------------------------------------------

    def resolve(self, kind: EntityKind, term: str) -> Task | Project:
        """Resolve a term to exactly one task or project.

        Raises:
            NotFoundError: If nothing matches
            ValidationError: If the name matches more than one entity and
                there is no prompter to choose between them
        """
        if is_id_term(term):
            return self.storage.get(kind, int(term))

        matches = self.storage.list(kind, filter=term)
        if not matches:
            raise NotFoundError(kind.label, repr(term))
        if len(matches) > 1 and self.prompter is not None:
            return self.prompter.choose(kind, matches)
        if len(matches) > 1:
            ids = ", ".join(str(match.id) for match in matches)
            raise ValidationError(
                f"{kind.label} name {term!r} is ambiguous, matches ids: {ids}"
            )
        return matches[0]

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def search(self, request: SearchRequest) -> CommandResult:
        kind = request.kind
        if is_id_term(request.term):
            try:
                matches = [self.storage.get(kind, int(request.term))]
            except NotFoundError:
                matches = []
        else:
            matches = self.storage.list(kind, filter=request.term)

        if not matches:
            return CommandResult(message=f"No {kind.plural} match {request.term!r}")
        if len(matches) == 1:
            return CommandResult(view=format_detail(matches[0], self.config.table))
        return CommandResult(
            view=format_table(matches, kind, self.config.table, request.verbose)
        )

    def add(self, request: AddRequest) -> CommandResult:
        validate_name(request.name)
        fields = request.model_dump(
            exclude={"command", "kind"}, exclude_none=True
        )
        entity_id = self.storage.create(request.kind, fields)
        return CommandResult(
            message=f"Created {request.kind.value} {request.name} with id {entity_id}"
        )

    def delete(self, request: DeleteRequest) -> CommandResult:
        record = self.resolve(request.kind, request.term)
        self.storage.delete(request.kind, record.id)
        return CommandResult(
            message=f"Deleted {request.kind.value} {record.name} with id {record.id}"
        )

    def update(self, request: UpdateRequest) -> CommandResult:
        record = None
        raw = request.changes
        if not raw:
            if self.prompter is None:
                raise ValidationError(
                    "Nothing to update, pass at least one field option"
                )
            record = self.resolve(request.kind, request.term)
            raw = self.prompter.edit(request.kind, record)
            if not raw:
                return CommandResult(message="No changes made")

        changes = self._parse_changes(raw)
        if changes.get("name") is not None:
            validate_name(changes["name"])

        if record is None:
            record = self.resolve(request.kind, request.term)
        self.storage.update(request.kind, record.id, changes)
        return CommandResult(
            message=f"Updated {request.kind.value} {record.id}: {', '.join(changes)}"
        )

    def ls(self, request: ListRequest) -> CommandResult:
        kind = request.kind
        order_by = request.order_by or (
            OrderBy.PRIORITY if kind is EntityKind.TASK else OrderBy.NAME
        )
        # Most important first unless a direction is given
        direction = request.direction or (
            OrderDir.DESC if order_by is OrderBy.PRIORITY else OrderDir.ASC
        )

        if request.full:
            limit = None
        elif request.limit is not None:
            limit = request.limit
        else:
            limit = DEFAULT_LIST_LIMIT

        records = self.storage.list(
            kind,
            order_by=order_by,
            direction=direction,
            limit=limit,
            offset=request.offset,
        )
        verbose = (
            request.verbose or request.full or self.config.list.default_verbose
        )

        footer = None
        if not request.full:
            footer = list_footer(request.offset, len(records), self.storage.count(kind))

        if not records:
            return CommandResult(message=f"No {kind.plural} found", footer=footer)
        return CommandResult(
            view=format_table(records, kind, self.config.table, verbose),
            footer=footer,
        )

    def check(self, request: CheckRequest) -> CommandResult:
        task = self.resolve(EntityKind.TASK, request.term)
        completed = not request.incomplete
        self.storage.set_completed(task.id, completed)
        state = "complete" if completed else "incomplete"
        return CommandResult(message=f"Marked task {task.name} ({task.id}) {state}")

    def assign(self, request: AssignRequest) -> CommandResult:
        task = self.resolve(EntityKind.TASK, request.task_term)
        project = self.resolve(EntityKind.PROJECT, request.project_term)
        self.storage.assign(task.id, project.id)
        return CommandResult(
            message=f"Assigned task {task.name} ({task.id}) "
            f"to project {project.name} ({project.id})"
        )

    def unassign(self, request: UnassignRequest) -> CommandResult:
        task = self.resolve(EntityKind.TASK, request.task_term)
        self.storage.unassign(task.id)
        return CommandResult(message=f"Unassigned task {task.name} ({task.id})")

    @staticmethod
    def _parse_changes(raw: dict[str, str]) -> dict[str, Any]:
        """Convert raw option text into typed field changes."""
        changes: dict[str, Any] = {}
        for key, value in raw.items():
            if value == NULL_VALUE:
                changes[key] = None
            elif key == "priority":
                try:
                    changes[key] = int(value)
                except ValueError as e:
                    raise ValidationError(
                        f"Priority must be a non-negative integer or {NULL_VALUE}, "
                        f"got {value!r}"
                    ) from e
            else:
                changes[key] = value
        return changes
