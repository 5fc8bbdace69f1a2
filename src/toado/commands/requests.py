"""Typed command requests.

The CLI turns argv into one of these models; the dispatcher only ever sees
validated requests, never raw flags.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from toado.models import EntityKind, OrderBy, OrderDir


class CommandKind(str, Enum):
    """Commands understood by the dispatcher."""

    SEARCH = "search"
    ADD = "add"
    DELETE = "delete"
    UPDATE = "update"
    LS = "ls"
    CHECK = "check"
    ASSIGN = "assign"
    UNASSIGN = "unassign"


class _Request(BaseModel):
    model_config = ConfigDict(frozen=True)


class SearchRequest(_Request):
    command: Literal[CommandKind.SEARCH] = CommandKind.SEARCH
    kind: EntityKind = EntityKind.TASK
    term: str
    verbose: bool = False


class AddRequest(_Request):
    """Fields for a new task or project. Unset optional fields stay empty."""

    command: Literal[CommandKind.ADD] = CommandKind.ADD
    kind: EntityKind = EntityKind.TASK
    name: str
    priority: int | None = None
    start_time: str | None = None
    end_time: str | None = None
    repeat: str | None = None
    notes: str | None = None


class DeleteRequest(_Request):
    command: Literal[CommandKind.DELETE] = CommandKind.DELETE
    kind: EntityKind = EntityKind.TASK
    term: str


class UpdateRequest(_Request):
    """Partial update.

    ``changes`` maps field names to the raw option text. The literal
    ``null`` clears a field.
    """

    command: Literal[CommandKind.UPDATE] = CommandKind.UPDATE
    kind: EntityKind = EntityKind.TASK
    term: str
    changes: dict[str, str] = Field(default_factory=dict)


class ListRequest(_Request):
    command: Literal[CommandKind.LS] = CommandKind.LS
    kind: EntityKind = EntityKind.TASK
    order_by: OrderBy | None = None
    direction: OrderDir | None = None
    limit: int | None = None
    offset: int | None = None
    verbose: bool = False
    full: bool = False


class CheckRequest(_Request):
    command: Literal[CommandKind.CHECK] = CommandKind.CHECK
    term: str
    incomplete: bool = False


class AssignRequest(_Request):
    command: Literal[CommandKind.ASSIGN] = CommandKind.ASSIGN
    task_term: str
    project_term: str


class UnassignRequest(_Request):
    command: Literal[CommandKind.UNASSIGN] = CommandKind.UNASSIGN
    task_term: str


Request = (
    SearchRequest
    | AddRequest
    | DeleteRequest
    | UpdateRequest
    | ListRequest
    | CheckRequest
    | AssignRequest
    | UnassignRequest
)
