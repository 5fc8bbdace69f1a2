"""Command layer: typed requests and the dispatcher that executes them."""

from .dispatcher import CommandResult, Dispatcher, Prompter
from .requests import (
    AddRequest,
    AssignRequest,
    CheckRequest,
    CommandKind,
    DeleteRequest,
    ListRequest,
    Request,
    SearchRequest,
    UnassignRequest,
    UpdateRequest,
)

__all__ = [
    "AddRequest",
    "AssignRequest",
    "CheckRequest",
    "CommandKind",
    "CommandResult",
    "DeleteRequest",
    "Dispatcher",
    "ListRequest",
    "Prompter",
    "Request",
    "SearchRequest",
    "UnassignRequest",
    "UpdateRequest",
]
