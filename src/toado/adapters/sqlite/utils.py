"""Utility functions for SQLite adapter."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from toado.errors import StorageError

# Largest value an INTEGER PRIMARY KEY can hold
MAX_ROW_ID = 2**63 - 1


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert sqlite3.Row to dictionary.

    Args:
        row: sqlite3.Row object

    Returns:
        Dictionary with column names as keys
    """
    if row is None:
        return {}
    return dict(row)


def build_set_clause(updates: dict[str, Any]) -> tuple[str, list[Any]]:
    """Build SQL UPDATE SET clause from updates dictionary.

    Unlike a filter, a None value is kept and written as NULL, which is how
    optional columns are cleared.

    Args:
        updates: Dictionary of column names to new values

    Returns:
        Tuple of (SET clause string, parameters list)
    """
    set_parts = []
    params = []

    for key, value in updates.items():
        set_parts.append(f"{key} = ?")
        params.append(value)

    return ", ".join(set_parts), params


def build_search_clause(search: str | None) -> tuple[str, list[Any]]:
    """Build a WHERE clause matching a case-insensitive substring of name.

    Relies on the ``casefold`` function registered on every connection.
    """
    if search is None:
        return "", []
    return " WHERE instr(casefold(name), casefold(?)) > 0", [search]


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """Translate sqlite3 errors raised inside the block into StorageError."""
    try:
        yield
    except sqlite3.Error as e:
        raise StorageError(f"Failed to {action}: {e}") from e
