"""Shared SQL for the task and project repositories."""

from __future__ import annotations

import sqlite3
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from toado.adapters.sqlite.connection import DatabaseConnection
from toado.adapters.sqlite.utils import (
    build_search_clause,
    MAX_ROW_ID,
    build_set_clause,
    row_to_dict,
    storage_errors,
)
from toado.errors import NotFoundError
from toado.models import ListFilters, OrderBy
from toado.utils.logger import get_logger

ModelT = TypeVar("ModelT", bound=BaseModel)


class SqliteRepositoryBase(Generic[ModelT]):
    """Row-level operations common to every table.

    Subclasses set ``table``, ``columns``, ``model`` and ``kind``.
    """

    table: str
    columns: tuple[str, ...]
    model: type[ModelT]
    kind: str

    def __init__(self, database: DatabaseConnection):
        self.database = database

    @property
    def connection(self) -> sqlite3.Connection:
        return self.database.connection

    def list_all(self, filters: ListFilters) -> list[ModelT]:
        """List rows matching the search term, ordered and paginated."""
        where, params = build_search_clause(filters.search)
        query = f"SELECT {', '.join(self.columns)} FROM {self.table}{where}"

        # OrderBy values are a fixed set of column names
        query += f" ORDER BY {filters.order_by.value} {filters.direction.value.upper()}"
        if filters.order_by is not OrderBy.ID:
            query += ", id ASC"

        if filters.limit is not None:
            query += " LIMIT ?"
            params.append(filters.limit)
        elif filters.offset is not None:
            query += " LIMIT -1"

        if filters.offset is not None:
            query += " OFFSET ?"
            params.append(filters.offset)

        with storage_errors(f"list {self.table}"):
            rows = self.connection.execute(query, params).fetchall()

        return [self.model(**row_to_dict(row)) for row in rows]

    def count(self, search: str | None = None) -> int:
        where, params = build_search_clause(search)
        with storage_errors(f"count {self.table}"):
            row = self.connection.execute(
                f"SELECT COUNT(*) FROM {self.table}{where}", params
            ).fetchone()
        return row[0]

    def get(self, entity_id: int) -> ModelT:
        if entity_id > MAX_ROW_ID:
            raise NotFoundError(self.kind, entity_id)
        with storage_errors(f"read {self.kind.lower()} {entity_id}"):
            row = self.connection.execute(
                f"SELECT {', '.join(self.columns)} FROM {self.table} WHERE id = ?",
                (entity_id,),
            ).fetchone()

        if not row:
            raise NotFoundError(self.kind, entity_id)

        return self.model(**row_to_dict(row))

    def exists(self, entity_id: int) -> bool:
        if entity_id > MAX_ROW_ID:
            return False
        with storage_errors(f"read {self.kind.lower()} {entity_id}"):
            row = self.connection.execute(
                f"SELECT 1 FROM {self.table} WHERE id = ?", (entity_id,)
            ).fetchone()
        return row is not None

    def _insert(self, data: dict[str, Any]) -> ModelT:
        cols = list(data)
        placeholders = ", ".join("?" for _ in cols)

        with storage_errors(f"create {self.kind.lower()}"):
            cursor = self.connection.execute(
                f"INSERT INTO {self.table} ({', '.join(cols)}) VALUES ({placeholders})",
                [data[col] for col in cols],
            )
            self.connection.commit()

        entity_id = cursor.lastrowid
        get_logger("sqlite").debug("created %s %s", self.kind.lower(), entity_id)
        return self.get(entity_id)

    def _update(self, entity_id: int, changes: dict[str, Any]) -> ModelT:
        if not self.exists(entity_id):
            raise NotFoundError(self.kind, entity_id)

        if not changes:
            return self.get(entity_id)

        set_clause, params = build_set_clause(changes)
        params.append(entity_id)

        with storage_errors(f"update {self.kind.lower()} {entity_id}"):
            self.connection.execute(
                f"UPDATE {self.table} SET {set_clause} WHERE id = ?", params
            )
            self.connection.commit()

        get_logger("sqlite").debug(
            "updated %s %s: %s", self.kind.lower(), entity_id, ", ".join(changes)
        )
        return self.get(entity_id)

    def delete(self, entity_id: int) -> None:
        if entity_id > MAX_ROW_ID:
            raise NotFoundError(self.kind, entity_id)
        with storage_errors(f"delete {self.kind.lower()} {entity_id}"):
            cursor = self.connection.execute(
                f"DELETE FROM {self.table} WHERE id = ?", (entity_id,)
            )
            self.connection.commit()

        if cursor.rowcount == 0:
            raise NotFoundError(self.kind, entity_id)

        get_logger("sqlite").debug("deleted %s %s", self.kind.lower(), entity_id)
