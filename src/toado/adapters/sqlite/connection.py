"""Database connection management for the Toado SQLite database.

A connection is opened for one command invocation and closed when the
command returns. The database path is always passed in explicitly.
"""

from __future__ import annotations

import os
import sqlite3
from pathlib import Path

from toado.adapters.sqlite.migrations.m001_initial_schema import ALL_MIGRATIONS
from toado.adapters.sqlite.migrations.runner import MigrationRunner
from toado.errors import StorageError
from toado.utils.logger import get_logger


def _casefold(value: str | None) -> str | None:
    return value.casefold() if value is not None else None


class DatabaseConnection:
    """Connection manager for one SQLite database file.

    Provides:
    - Foreign key constraint enforcement
    - Automatic directory creation
    - Proper file permissions (owner read/write only)
    - Schema migrations on open
    - A ``casefold`` SQL function for Unicode-aware case-insensitive search

    Usable as a context manager; the connection is closed on exit.
    """

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path)
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get the open connection, opening it on first use."""
        if self._connection is None:
            self._connection = self.open()
        return self._connection

    def open(self) -> sqlite3.Connection:
        """Open and configure the database connection.

        Raises:
            StorageError: If the file cannot be created or opened, or is not
                a usable SQLite database
        """
        logger = get_logger("sqlite")
        is_new_database = not self.db_path.exists()

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(
                f"Failed to create database directory {self.db_path.parent}: {e}"
            ) from e

        try:
            connection = sqlite3.connect(str(self.db_path), timeout=30.0)
        except sqlite3.Error as e:
            raise StorageError(f"Failed to open database {self.db_path}: {e}") from e

        try:
            connection.row_factory = sqlite3.Row
            connection.create_function("casefold", 1, _casefold, deterministic=True)
            connection.execute("PRAGMA foreign_keys = ON")

            if is_new_database:
                os.chmod(self.db_path, 0o600)

            applied = MigrationRunner(connection).run(ALL_MIGRATIONS)
        except (sqlite3.Error, RuntimeError, OSError) as e:
            connection.close()
            raise StorageError(f"Failed to initialize database {self.db_path}: {e}") from e

        if applied:
            logger.info("migrated %s to version %d", self.db_path, applied[-1].version)
        logger.debug("opened database %s", self.db_path)
        return connection

    def close(self, commit: bool = True) -> None:
        """Close the database connection.

        Pending changes are committed, or rolled back when ``commit`` is False.
        """
        if self._connection is not None:
            try:
                if commit:
                    self._connection.commit()
                else:
                    self._connection.rollback()
            finally:
                self._connection.close()
                self._connection = None

    def __enter__(self) -> DatabaseConnection:
        if self._connection is None:
            self._connection = self.open()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close(commit=exc_type is None)
